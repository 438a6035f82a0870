"""
Tests for the project policy table and the role gate.
"""
import uuid

import pytest
from rest_framework.exceptions import NotFound

from projects.models import ProjectMember
from projects.permissions import POLICY, is_allowed, require_member, require_role, resolve_role
from tracker.exceptions import AccessDenied

pytestmark = pytest.mark.django_db


def test_every_role_can_view():
    for role, _ in ProjectMember.ROLE_CHOICES:
        assert is_allowed(role, 'project.view')


def test_viewer_is_read_only():
    writes = [action for action in POLICY if action != 'project.view']
    assert not any(is_allowed(ProjectMember.VIEWER, action) for action in writes)


def test_only_owner_deletes_project():
    assert is_allowed(ProjectMember.OWNER, 'project.delete')
    assert not is_allowed(ProjectMember.ADMIN, 'project.delete')


def test_members_write_tasks_but_not_structure():
    assert is_allowed(ProjectMember.MEMBER, 'task.write')
    assert is_allowed(ProjectMember.MEMBER, 'comment.create')
    assert not is_allowed(ProjectMember.MEMBER, 'board.manage')
    assert not is_allowed(ProjectMember.MEMBER, 'member.manage')


def test_resolve_role(project, owner, make_user):
    assert resolve_role(project, owner) == ProjectMember.OWNER
    assert resolve_role(project, make_user('stranger')) is None


def test_non_member_gets_not_found(project, make_user):
    with pytest.raises(NotFound):
        require_member(project, make_user('stranger'))


def test_wrong_role_gets_access_denied(project, member_with_role):
    viewer = member_with_role(ProjectMember.VIEWER)

    with pytest.raises(AccessDenied):
        require_role(project, viewer, 'task.write')


def test_allowed_role_is_returned(project, member_with_role):
    admin = member_with_role(ProjectMember.ADMIN)

    assert require_role(project, admin, 'board.manage') == ProjectMember.ADMIN


def test_project_views_gate_by_method(project, member_with_role, client_for):
    viewer = member_with_role(ProjectMember.VIEWER)
    client = client_for(viewer)

    assert client.get(f'/api/projects/{project.id}/').status_code == 200
    assert client.put(f'/api/projects/{project.id}/', {'name': 'Mine now'}, format='json').status_code == 403
    assert client.post(f'/api/projects/{project.id}/boards/', {'name': 'Extra'}, format='json').status_code == 403


def test_role_is_checked_before_the_body(project, member_with_role, client_for):
    member = member_with_role(ProjectMember.MEMBER)

    response = client_for(member).post(f'/api/projects/{project.id}/members/', {}, format='json')

    assert response.status_code == 403


def test_project_views_hide_projects_from_strangers(project, make_user, client_for):
    client = client_for(make_user('stranger'))

    assert client.delete(f'/api/projects/{project.id}/').status_code == 404
    assert client.get(f'/api/projects/{project.id}/boards/').status_code == 404
    assert client.get(f'/api/projects/{uuid.uuid4()}/').status_code == 404
