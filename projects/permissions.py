# projects/permissions.py
"""
Project-scoped authorization.

Every decision goes through POLICY, which maps an action to the roles allowed
to perform it. Callers resolve the owning project first (walking up from a
board, column, task, comment or attachment) and then call `require_role`.
Non-members get NotFound so the existence of a project is never disclosed.
"""
import logging

from django.utils import timezone
from rest_framework import permissions
from rest_framework.exceptions import NotFound

from tracker.exceptions import AccessDenied
from .models import Project, ProjectMember

logger = logging.getLogger(__name__)

OWNER = ProjectMember.OWNER
ADMIN = ProjectMember.ADMIN
MEMBER = ProjectMember.MEMBER
VIEWER = ProjectMember.VIEWER

ALL_ROLES = frozenset({OWNER, ADMIN, MEMBER, VIEWER})
MANAGERS = frozenset({OWNER, ADMIN})
CONTRIBUTORS = frozenset({OWNER, ADMIN, MEMBER})

POLICY = {
    'project.view': ALL_ROLES,
    'project.update': MANAGERS,
    'project.delete': frozenset({OWNER}),
    'member.manage': MANAGERS,
    'board.manage': MANAGERS,
    'column.manage': MANAGERS,
    'task.write': CONTRIBUTORS,
    'comment.create': CONTRIBUTORS,
    'comment.moderate': MANAGERS,
    'attachment.upload': CONTRIBUTORS,
    'attachment.moderate': MANAGERS,
}


def resolve_role(project, user):
    """Return the user's role in the project, or None when not a member."""
    return (
        ProjectMember.objects
        .filter(project=project, user=user)
        .values_list('role', flat=True)
        .first()
    )


def is_allowed(role, action):
    return role in POLICY[action]


def require_role(project, user, action):
    """
    Return the caller's role if POLICY allows it to perform `action`.

    Raises NotFound for non-members and AccessDenied for members whose role
    is not allowed.
    """
    role = resolve_role(project, user)
    if role is None:
        logger.warning(f"User {user.id} is not a member of project {project.id} ({action}) at {timezone.now()}")
        raise NotFound('Project not found.')
    if not is_allowed(role, action):
        logger.warning(f"User {user.id} with role {role} denied {action} on project {project.id} at {timezone.now()}")
        raise AccessDenied()
    logger.debug(f"User {user.id} with role {role} allowed {action} on project {project.id}")
    return role


def require_member(project, user):
    return require_role(project, user, 'project.view')


class HasProjectRole(permissions.BasePermission):
    """
    Gate a project-scoped view through POLICY.

    The view names the URL kwarg holding the project id in `project_kwarg`
    and maps HTTP methods to actions in `project_actions`. Methods without an
    entry only require membership.
    """

    def has_permission(self, request, view):
        project_id = view.kwargs.get(getattr(view, 'project_kwarg', 'pk'))
        if not project_id:
            logger.warning(f"No project id in request to {request.path}")
            return False

        try:
            project = Project.objects.get(id=project_id)
        except Project.DoesNotExist:
            raise NotFound('Project not found.')

        action = getattr(view, 'project_actions', {}).get(request.method.lower(), 'project.view')
        require_role(project, request.user, action)
        return True
