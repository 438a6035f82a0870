# projects/signals.py
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from workspace.board.models import Board, Column
from .models import Project

logger = logging.getLogger(__name__)

DEFAULT_BOARD_NAME = 'Main Board'


@receiver(post_save, sender=Project)
def project_created_or_updated(sender, instance, created, **kwargs):
    """
    On creation: seed the project with its default board.
    On update: log only.
    """
    if created:
        logger.info(f"Project {instance.name} (ID: {instance.id}) created by {instance.owner_id}")
        create_default_board(instance)
    else:
        logger.info(f"Project {instance.name} (ID: {instance.id}) updated")


def create_default_board(project):
    """Create "Main Board" at position 0 with the To Do / In Progress / Done columns."""
    board = Board.objects.create(project=project, name=DEFAULT_BOARD_NAME, position=0)
    Column.objects.bulk_create([
        Column(board=board, name=name, color=color, position=position)
        for position, (name, color) in enumerate(Column.DEFAULT_COLUMNS)
    ])
    logger.info(f"Default board '{board.name}' created for project {project.id}")
    return board
