"""
Tests for task lifecycle, ordering, filtering and statistics.
"""
import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from projects import services as project_services
from projects.models import ProjectMember
from tracker.exceptions import AccessDenied
from workspace.tasks import services
from workspace.tasks.models import Task

pytestmark = pytest.mark.django_db


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Creation
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_create_task_defaults(owner, client_for, columns):
    response = client_for(owner).post(
        '/api/tasks/', {'column_id': str(columns[0].id), 'title': 'Write copy'}, format='json'
    )

    assert response.status_code == 201
    data = response.json()['data']
    assert (data['priority'], data['status'], data['position']) == ('MEDIUM', 'TODO', 0)
    assert data['creator']['id'] == str(owner.id)
    assert data['assignee'] is None


def test_create_task_appends(owner, columns):
    positions = [services.create_task(columns[0].id, owner, f'Task {i}').position for i in range(3)]

    assert positions == [0, 1, 2]


def test_create_task_after_gap(owner, columns):
    Task.objects.create(column=columns[0], title='Far away', position=7, creator=owner)

    assert services.create_task(columns[0].id, owner, 'Next').position == 8


def test_create_task_validation(owner, client_for, columns):
    client = client_for(owner)
    url = '/api/tasks/'

    assert client.post(url, {'column_id': str(columns[0].id), 'title': ''}, format='json').status_code == 400
    assert client.post(url, {'column_id': str(columns[0].id), 'title': 't' * 201}, format='json').status_code == 400
    assert client.post(
        url, {'column_id': str(columns[0].id), 'title': 'ok', 'priority': 'WHENEVER'}, format='json'
    ).status_code == 400


def test_assignee_must_be_member(owner, make_user, columns):
    with pytest.raises(ValidationError):
        services.create_task(columns[0].id, owner, 'Delegate', assignee_id=make_user('stranger').id)


def test_assignee_member_is_accepted(owner, columns, member_with_role):
    member = member_with_role(ProjectMember.MEMBER)

    task = services.create_task(columns[0].id, owner, 'Delegate', assignee_id=member.id)

    assert task.assignee == member


def test_viewer_cannot_create_task(columns, member_with_role, client_for):
    viewer = member_with_role(ProjectMember.VIEWER)

    response = client_for(viewer).post(
        '/api/tasks/', {'column_id': str(columns[0].id), 'title': 'Nope'}, format='json'
    )

    assert response.status_code == 403


def test_non_member_cannot_see_column(make_user, columns, client_for):
    response = client_for(make_user('stranger')).post(
        '/api/tasks/', {'column_id': str(columns[0].id), 'title': 'Nope'}, format='json'
    )

    assert response.status_code == 404


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Update and move
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_column_change_appends_and_ignores_position(owner, columns):
    services.create_task(columns[1].id, owner, 'Already there')
    task = services.create_task(columns[0].id, owner, 'Mover')

    moved = services.update_task(task.id, owner, column_id=columns[1].id, position=0)

    assert moved.column_id == columns[1].id
    assert moved.position == 1


def test_move_task_appends_to_target(owner, client_for, columns):
    services.create_task(columns[2].id, owner, 'Shipped')
    task = services.create_task(columns[0].id, owner, 'Mover')

    response = client_for(owner).post(
        f'/api/tasks/{task.id}/move/',
        {'target_column_id': str(columns[2].id), 'target_position': 0},
        format='json',
    )

    assert response.status_code == 200
    titles = list(columns[2].tasks.order_by('position').values_list('title', flat=True))
    assert titles[-1] == 'Mover'


def test_same_column_position_is_honoured(owner, columns):
    first, second, third = [services.create_task(columns[0].id, owner, t) for t in ('a', 'b', 'c')]

    services.update_task(third.id, owner, position=0)

    titles = list(columns[0].tasks.order_by('position').values_list('title', flat=True))
    assert titles == ['c', 'a', 'b']


def test_move_to_other_project_column(owner, columns):
    other = project_services.create_project(owner, 'Elsewhere')
    foreign_column = other.boards.get().columns.get(position=0)
    task = services.create_task(columns[0].id, owner, 'Stay home')

    with pytest.raises(NotFound):
        services.move_task(task.id, owner, foreign_column.id, 0)


def test_done_sets_and_clears_completed_at(owner, client_for, columns):
    task = services.create_task(columns[0].id, owner, 'Finish me')
    client = client_for(owner)

    done = client.put(f'/api/tasks/{task.id}/', {'status': 'DONE'}, format='json').json()['data']
    assert done['completed_at'] is not None

    reopened = client.put(f'/api/tasks/{task.id}/', {'status': 'REVIEW'}, format='json').json()['data']
    assert reopened['completed_at'] is None


def test_done_timestamp_survives_unrelated_patch(owner, columns):
    task = services.create_task(columns[0].id, owner, 'Finish me')
    done = services.update_task(task.id, owner, status=Task.DONE)

    renamed = services.update_task(task.id, owner, title='Finished')

    assert renamed.completed_at == done.completed_at


def test_any_status_transition_is_allowed(owner, columns):
    task = services.create_task(columns[0].id, owner, 'Wander')

    for status in (Task.CANCELLED, Task.DONE, Task.TODO, Task.REVIEW):
        assert services.update_task(task.id, owner, status=status).status == status


def test_unassign_with_null(owner, columns, member_with_role, client_for):
    member = member_with_role(ProjectMember.MEMBER)
    task = services.create_task(columns[0].id, owner, 'Delegate', assignee_id=member.id)

    response = client_for(owner).put(f'/api/tasks/{task.id}/', {'assignee_id': None}, format='json')

    assert response.status_code == 200
    assert response.json()['data']['assignee'] is None


def test_reassign_revalidates_membership(owner, make_user, columns):
    task = services.create_task(columns[0].id, owner, 'Delegate')

    with pytest.raises(ValidationError):
        services.update_task(task.id, owner, assignee_id=make_user('stranger').id)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Ordering
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_reorder_tasks(owner, client_for, columns):
    a, b, c = [services.create_task(columns[0].id, owner, t) for t in ('a', 'b', 'c')]

    response = client_for(owner).post(
        f'/api/tasks/reorder/{columns[0].id}/',
        {'task_ids': [str(c.id), str(a.id), str(b.id)]},
        format='json',
    )

    assert response.status_code == 200
    assert [t['title'] for t in response.json()['data']] == ['c', 'a', 'b']
    assert [t['position'] for t in response.json()['data']] == [0, 1, 2]


def test_partial_reorder_keeps_unlisted_tasks(owner, columns):
    a, b, c = [services.create_task(columns[0].id, owner, t) for t in ('a', 'b', 'c')]

    services.reorder_tasks(columns[0].id, owner, [b.id, a.id])

    assert list(columns[0].tasks.order_by('position').values_list('title', 'position')) == [
        ('b', 0), ('a', 1), ('c', 2),
    ]


def test_partial_reorder_collision_leaves_tasks_untouched(owner, client_for, columns):
    a, b, c = [services.create_task(columns[0].id, owner, t) for t in ('a', 'b', 'c')]

    response = client_for(owner).post(
        f'/api/tasks/reorder/{columns[0].id}/', {'task_ids': [str(c.id)]}, format='json'
    )

    assert response.status_code == 409
    assert list(columns[0].tasks.order_by('position').values_list('title', 'position')) == [
        ('a', 0), ('b', 1), ('c', 2),
    ]


def test_reorder_tasks_rejects_tasks_of_other_column(owner, columns):
    here = services.create_task(columns[0].id, owner, 'here')
    there = services.create_task(columns[1].id, owner, 'there')

    with pytest.raises(ValidationError):
        services.reorder_tasks(columns[0].id, owner, [there.id, here.id])

    here.refresh_from_db()
    there.refresh_from_db()
    assert (here.column_id, here.position) == (columns[0].id, 0)
    assert (there.column_id, there.position) == (columns[1].id, 0)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Reads, delete, listing
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_get_task_includes_comments_and_attachments(owner, client_for, columns):
    task = services.create_task(columns[0].id, owner, 'Discuss')

    response = client_for(owner).get(f'/api/tasks/{task.id}/')

    assert response.status_code == 200
    assert response.json()['data']['comments'] == []
    assert response.json()['data']['attachments'] == []


def test_delete_task(owner, client_for, columns):
    task = services.create_task(columns[0].id, owner, 'Temporary')
    client = client_for(owner)

    assert client.delete(f'/api/tasks/{task.id}/').status_code == 200
    assert client.get(f'/api/tasks/{task.id}/').status_code == 404


def test_viewer_can_read_but_not_delete(owner, columns, member_with_role, client_for):
    viewer = member_with_role(ProjectMember.VIEWER)
    task = services.create_task(columns[0].id, owner, 'Look only')
    client = client_for(viewer)

    assert client.get(f'/api/tasks/{task.id}/').status_code == 200
    assert client.delete(f'/api/tasks/{task.id}/').status_code == 403


def test_list_project_tasks_ordering(owner, client_for, project, columns):
    services.create_task(columns[2].id, owner, 'done-0')
    services.create_task(columns[0].id, owner, 'todo-0')
    services.create_task(columns[0].id, owner, 'todo-1')
    services.create_task(columns[1].id, owner, 'doing-0')

    response = client_for(owner).get('/api/tasks/', {'project_id': str(project.id)})

    assert response.status_code == 200
    assert [t['title'] for t in response.json()['data']] == ['todo-0', 'todo-1', 'doing-0', 'done-0']


def test_list_project_tasks_filters(owner, project, columns, member_with_role):
    member = member_with_role(ProjectMember.MEMBER)
    now = timezone.now()
    services.create_task(columns[0].id, owner, 'Fix login bug', priority=Task.HIGH, assignee_id=member.id,
                         due_date=now + timedelta(days=1))
    services.create_task(columns[0].id, owner, 'Write docs', description='Mention the LOGIN flow',
                         due_date=now + timedelta(days=10))
    services.create_task(columns[1].id, owner, 'Refactor', priority=Task.LOW)

    def titles(**filters):
        return [t.title for t in services.list_project_tasks(project.id, owner, **filters)]

    assert titles(assignee_id=member.id) == ['Fix login bug']
    assert titles(priority=Task.HIGH) == ['Fix login bug']
    assert titles(status=Task.TODO) == ['Fix login bug', 'Write docs', 'Refactor']
    assert titles(search='login') == ['Fix login bug', 'Write docs']
    assert titles(due_before=now + timedelta(days=1)) == ['Fix login bug']
    assert titles(due_after=now + timedelta(days=2)) == ['Write docs']


def test_list_project_tasks_requires_project_id(owner, client_for):
    assert client_for(owner).get('/api/tasks/').status_code == 400


def test_list_project_tasks_hidden_from_non_members(make_user, project):
    with pytest.raises(NotFound):
        services.list_project_tasks(project.id, make_user('stranger'))


def test_statistics(owner, client_for, project, columns):
    services.create_task(columns[0].id, owner, 'a', priority=Task.HIGH)
    b = services.create_task(columns[0].id, owner, 'b')
    services.update_task(b.id, owner, status=Task.DONE)

    response = client_for(owner).get(f'/api/tasks/stats/{project.id}/')

    assert response.status_code == 200
    stats = response.json()['data']
    assert stats['total'] == 2
    assert stats['by_status'] == {'TODO': 1, 'IN_PROGRESS': 0, 'REVIEW': 0, 'DONE': 1, 'CANCELLED': 0}
    assert stats['by_priority'] == {'LOW': 0, 'MEDIUM': 1, 'HIGH': 1, 'URGENT': 0}


def test_unknown_task(owner):
    with pytest.raises(NotFound):
        services.get_task(uuid.uuid4(), owner)


def test_viewer_cannot_update(owner, columns, member_with_role):
    viewer = member_with_role(ProjectMember.VIEWER)
    task = services.create_task(columns[0].id, owner, 'Look only')

    with pytest.raises(AccessDenied):
        services.update_task(task.id, viewer, title='Touched')
