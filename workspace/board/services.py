# workspace/board/services.py
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from projects.permissions import require_member, require_role
from projects.services import load_project
from tracker.exceptions import InvalidOperation
from workspace.ordering import apply_order, next_position, place
from .models import Board, Column

logger = logging.getLogger(__name__)


def load_board(board_id):
    try:
        return Board.objects.select_related('project').get(id=board_id)
    except Board.DoesNotExist:
        raise NotFound('Board not found.')


def load_column(column_id):
    try:
        return Column.objects.select_related('board__project').get(id=column_id)
    except Column.DoesNotExist:
        raise NotFound('Column not found.')


def list_boards(project_id, user):
    project = load_project(project_id)
    require_member(project, user)
    return project.boards.prefetch_related('columns').order_by('position')


def create_board(project_id, user, name, description=None):
    """Append an empty board to the project."""
    project = load_project(project_id)
    require_role(project, user, 'board.manage')
    with transaction.atomic():
        board = Board.objects.create(
            project=project,
            name=name,
            description=description,
            position=next_position(project.boards.all()),
        )
    logger.info(f"Board {board.id} created in project {project.id} by user {user.id} at {timezone.now()}")
    return board


def update_board(board_id, user, **fields):
    board = load_board(board_id)
    require_role(board.project, user, 'board.manage')
    position = fields.pop('position', None)
    with transaction.atomic():
        if position is not None:
            place(board, board.project.boards.all(), position)
        for name, value in fields.items():
            setattr(board, name, value)
        board.save()
    logger.info(f"Board {board.id} updated by user {user.id} at {timezone.now()}")
    return board


def delete_board(board_id, user):
    board = load_board(board_id)
    require_role(board.project, user, 'board.manage')
    board.delete()
    logger.info(f"Board {board_id} deleted by user {user.id} at {timezone.now()}")


def create_column(board_id, user, name, color=None, limit=None):
    board = load_board(board_id)
    require_role(board.project, user, 'column.manage')
    with transaction.atomic():
        column = Column.objects.create(
            board=board,
            name=name,
            color=color or Column.DEFAULT_COLOR,
            limit=limit,
            position=next_position(board.columns.all()),
        )
    logger.info(f"Column {column.id} created on board {board.id} by user {user.id} at {timezone.now()}")
    return column


def update_column(column_id, user, **fields):
    column = load_column(column_id)
    require_role(column.project, user, 'column.manage')
    position = fields.pop('position', None)
    with transaction.atomic():
        if position is not None:
            place(column, column.board.columns.all(), position)
        for name, value in fields.items():
            setattr(column, name, value)
        column.save()
    logger.info(f"Column {column.id} updated by user {user.id} at {timezone.now()}")
    return column


def delete_column(column_id, user):
    column = load_column(column_id)
    require_role(column.project, user, 'column.manage')
    if column.tasks.exists():
        raise InvalidOperation('Cannot delete column with tasks. Move or delete the tasks first.')
    column.delete()
    logger.info(f"Column {column_id} deleted by user {user.id} at {timezone.now()}")


def reorder_columns(board_id, user, column_ids):
    board = load_board(board_id)
    require_role(board.project, user, 'column.manage')
    apply_order(board.columns.all(), column_ids, field='column_ids')
    return board.columns.order_by('position')
