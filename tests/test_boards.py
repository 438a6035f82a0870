"""
Tests for boards, columns and column ordering.
"""
import uuid

import pytest
from rest_framework.exceptions import ValidationError

from projects.models import ProjectMember
from tracker.exceptions import AccessDenied, InvalidOperation
from workspace.board import services
from workspace.board.models import Board, Column
from workspace.tasks import services as task_services

pytestmark = pytest.mark.django_db


def test_create_board_appends_without_columns(owner, client_for, project):
    response = client_for(owner).post(f'/api/projects/{project.id}/boards/', {'name': 'Backlog'}, format='json')

    assert response.status_code == 201
    data = response.json()['data']
    assert data['position'] == 1
    assert data['columns'] == []


def test_list_boards(owner, client_for, project):
    services.create_board(project.id, owner, 'Backlog')

    response = client_for(owner).get(f'/api/projects/{project.id}/boards/')

    assert response.status_code == 200
    assert [b['name'] for b in response.json()['data']] == ['Main Board', 'Backlog']


def test_member_cannot_create_board(project, member_with_role):
    member = member_with_role(ProjectMember.MEMBER)

    with pytest.raises(AccessDenied):
        services.create_board(project.id, member, 'Sneaky')


def test_update_board_position(owner, project, board):
    backlog = services.create_board(project.id, owner, 'Backlog')

    services.update_board(backlog.id, owner, name='Icebox', position=0)

    ordered = list(project.boards.order_by('position').values_list('name', flat=True))
    assert ordered == ['Icebox', 'Main Board']


def test_delete_board_cascades(owner, client_for, board, columns):
    response = client_for(owner).delete(f'/api/boards/{board.id}/')

    assert response.status_code == 200
    assert not Board.objects.filter(id=board.id).exists()
    assert not Column.objects.filter(id__in=[c.id for c in columns]).exists()


def test_create_column_appends(owner, client_for, board):
    response = client_for(owner).post(
        f'/api/boards/{board.id}/columns/', {'name': 'Review', 'limit': 3}, format='json'
    )

    assert response.status_code == 201
    data = response.json()['data']
    assert data['position'] == 3
    assert data['color'] == '#6B7280'
    assert data['limit'] == 3


def test_create_column_validation(owner, client_for, board):
    client = client_for(owner)

    assert client.post(f'/api/boards/{board.id}/columns/', {'name': 'x' * 51}, format='json').status_code == 400
    assert client.post(f'/api/boards/{board.id}/columns/', {'name': 'ok', 'limit': 0}, format='json').status_code == 400


def test_update_column(owner, client_for, columns):
    response = client_for(owner).put(
        f'/api/columns/{columns[0].id}/', {'name': 'Backlog', 'color': '#000000'}, format='json'
    )

    assert response.status_code == 200
    columns[0].refresh_from_db()
    assert (columns[0].name, columns[0].color) == ('Backlog', '#000000')


def test_delete_column_with_tasks_fails(owner, columns):
    task = task_services.create_task(columns[0].id, owner, 'Blocker')

    with pytest.raises(InvalidOperation):
        services.delete_column(columns[0].id, owner)

    task_services.delete_task(task.id, owner)
    services.delete_column(columns[0].id, owner)
    assert not Column.objects.filter(id=columns[0].id).exists()


def test_delete_column_with_tasks_answers_400(owner, client_for, columns):
    task_services.create_task(columns[1].id, owner, 'Blocker')

    response = client_for(owner).delete(f'/api/columns/{columns[1].id}/')

    assert response.status_code == 400
    assert response.json()['error'] == 'invalid_operation'


def test_reorder_columns(owner, client_for, board, columns):
    todo, doing, done = columns

    response = client_for(owner).post(
        f'/api/columns/reorder/{board.id}/',
        {'column_ids': [str(done.id), str(todo.id), str(doing.id)]},
        format='json',
    )

    assert response.status_code == 200
    assert [c['name'] for c in response.json()['data']] == ['Done', 'To Do', 'In Progress']
    assert list(board.columns.order_by('position').values_list('position', flat=True)) == [0, 1, 2]


def test_partial_reorder_keeps_unlisted_columns(owner, client_for, board, columns):
    todo, doing, done = columns

    response = client_for(owner).post(
        f'/api/columns/reorder/{board.id}/', {'column_ids': [str(doing.id), str(todo.id)]}, format='json'
    )

    assert response.status_code == 200
    assert list(board.columns.order_by('position').values_list('name', 'position')) == [
        ('In Progress', 0), ('To Do', 1), ('Done', 2),
    ]


def test_partial_reorder_collision_answers_409(owner, client_for, board, columns):
    done = columns[2]

    response = client_for(owner).post(
        f'/api/columns/reorder/{board.id}/', {'column_ids': [str(done.id)]}, format='json'
    )

    assert response.status_code == 409
    assert response.json()['error'] == 'conflict'
    assert list(board.columns.order_by('position').values_list('name', 'position')) == [
        ('To Do', 0), ('In Progress', 1), ('Done', 2),
    ]


def test_reorder_columns_rejects_foreign_ids(owner, board, columns):
    with pytest.raises(ValidationError):
        services.reorder_columns(board.id, owner, [columns[0].id, uuid.uuid4()])

    assert [c.position for c in board.columns.order_by('name')] == [2, 1, 0]


def test_reorder_columns_rejects_duplicates(owner, board, columns):
    with pytest.raises(ValidationError):
        services.reorder_columns(board.id, owner, [columns[0].id, columns[0].id])


def test_viewer_cannot_reorder(project, board, columns, member_with_role):
    viewer = member_with_role(ProjectMember.VIEWER)

    with pytest.raises(AccessDenied):
        services.reorder_columns(board.id, viewer, [c.id for c in reversed(columns)])
