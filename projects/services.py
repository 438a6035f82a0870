# projects/services.py
"""
Project lifecycle and membership. Every function takes the calling user and
goes through the policy table in `projects.permissions` before reading or
writing anything.
"""
import logging

from django.db import transaction
from django.db.models import Prefetch
from django.utils import timezone
from rest_framework.exceptions import NotFound

from accounts.services import get_user
from tracker.exceptions import Conflict, InvalidOperation
from workspace.board.models import Board, Column
from workspace.tasks.models import Task
from .models import Project, ProjectMember
from .permissions import require_member, require_role

logger = logging.getLogger(__name__)


def _base_queryset():
    return (
        Project.objects
        .select_related('owner')
        .prefetch_related('members__user', 'boards__columns')
    )


def load_project(project_id, queryset=None):
    """Fetch a project by id or raise NotFound. No authorization."""
    queryset = queryset if queryset is not None else Project.objects.all()
    try:
        return queryset.get(id=project_id)
    except Project.DoesNotExist:
        raise NotFound('Project not found.')


def create_project(owner, name, description=None, color=None):
    with transaction.atomic():
        project = Project.objects.create(
            owner=owner,
            name=name,
            description=description,
            color=color or Project.DEFAULT_COLOR,
        )
        ProjectMember.objects.create(user=owner, project=project, role=ProjectMember.OWNER)
    logger.info(f"Project {project.id} created by user {owner.id} at {timezone.now()}")
    return load_project(project.id, _base_queryset())


def list_projects(user):
    return (
        _base_queryset()
        .filter(members__user=user, is_archived=False)
        .distinct()
        .order_by('-updated_at')
    )


def get_project(project_id, user):
    """The project with its full hierarchy, for members only."""
    tasks = Task.objects.select_related('creator', 'assignee').order_by('position')
    columns = Column.objects.order_by('position').prefetch_related(Prefetch('tasks', queryset=tasks))
    queryset = (
        Project.objects
        .select_related('owner')
        .prefetch_related(
            'members__user',
            Prefetch('boards', queryset=Board.objects.order_by('position').prefetch_related(
                Prefetch('columns', queryset=columns)
            )),
        )
    )
    project = load_project(project_id, queryset)
    require_member(project, user)
    return project


def update_project(project_id, user, **fields):
    project = load_project(project_id)
    require_role(project, user, 'project.update')
    for name, value in fields.items():
        setattr(project, name, value)
    project.save()
    logger.info(f"Project {project.id} updated by user {user.id} ({', '.join(fields)}) at {timezone.now()}")
    return load_project(project.id, _base_queryset())


def delete_project(project_id, user):
    project = load_project(project_id)
    require_role(project, user, 'project.delete')
    project.delete()
    logger.info(f"Project {project_id} deleted by user {user.id} at {timezone.now()}")


def add_member(project_id, caller, target_user_id, role=ProjectMember.MEMBER):
    project = load_project(project_id)
    require_role(project, caller, 'member.manage')
    target = get_user(target_user_id)
    if ProjectMember.objects.filter(project=project, user=target).exists():
        raise Conflict('User is already a member of this project.')
    membership = ProjectMember.objects.create(project=project, user=target, role=role)
    logger.info(f"User {target.id} added to project {project.id} as {role} by {caller.id} at {timezone.now()}")
    return membership


def _membership_of(project, target_user_id):
    membership = (
        ProjectMember.objects
        .select_related('user')
        .filter(project=project, user_id=target_user_id)
        .first()
    )
    if membership is None:
        raise NotFound('Member not found.')
    return membership


def remove_member(project_id, caller, target_user_id):
    project = load_project(project_id)
    require_role(project, caller, 'member.manage')
    membership = _membership_of(project, target_user_id)
    if membership.role == ProjectMember.OWNER:
        logger.warning(f"User {caller.id} tried to remove the owner of project {project.id} at {timezone.now()}")
        raise InvalidOperation('Cannot remove the project owner.')
    membership.delete()
    logger.info(f"User {target_user_id} removed from project {project.id} by {caller.id} at {timezone.now()}")


def change_member_role(project_id, caller, target_user_id, role):
    project = load_project(project_id)
    require_role(project, caller, 'member.manage')
    membership = _membership_of(project, target_user_id)
    if membership.role == ProjectMember.OWNER:
        raise InvalidOperation("Cannot change the project owner's role.")
    if role == ProjectMember.OWNER:
        raise InvalidOperation('Ownership cannot be transferred.')
    membership.role = role
    membership.save(update_fields=['role', 'updated_at'])
    logger.info(f"User {target_user_id} is now {role} in project {project.id} at {timezone.now()}")
    return membership
