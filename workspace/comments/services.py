# workspace/comments/services.py
import logging

from django.utils import timezone
from rest_framework.exceptions import NotFound

from projects.permissions import is_allowed, require_member, require_role
from tracker.exceptions import AccessDenied
from workspace.tasks.services import load_task
from .models import Comment

logger = logging.getLogger(__name__)


def load_comment(comment_id):
    try:
        return Comment.objects.select_related('task__column__board__project', 'author').get(id=comment_id)
    except Comment.DoesNotExist:
        raise NotFound('Comment not found.')


def list_comments(task_id, user):
    task = load_task(task_id)
    require_member(task.project, user)
    return task.comments.select_related('author').order_by('created_at')


def add_comment(task_id, user, content):
    task = load_task(task_id)
    require_role(task.project, user, 'comment.create')
    comment = Comment.objects.create(task=task, author=user, content=content)
    logger.info(f"Comment {comment.id} added to task {task.id} by user {user.id} at {timezone.now()}")
    return comment


def edit_comment(comment_id, user, content):
    comment = load_comment(comment_id)
    require_member(comment.task.project, user)
    if comment.author_id != user.id:
        logger.warning(f"User {user.id} tried to edit comment {comment.id} of another author at {timezone.now()}")
        raise AccessDenied('Only the author can edit this comment.')
    comment.content = content
    comment.edited = True
    comment.save(update_fields=['content', 'edited', 'updated_at'])
    logger.info(f"Comment {comment.id} edited by user {user.id} at {timezone.now()}")
    return comment


def delete_comment(comment_id, user):
    """Authors delete their own comments; OWNER and ADMIN delete any."""
    comment = load_comment(comment_id)
    role = require_member(comment.task.project, user)
    if comment.author_id != user.id and not is_allowed(role, 'comment.moderate'):
        logger.warning(f"User {user.id} with role {role} denied deleting comment {comment.id} at {timezone.now()}")
        raise AccessDenied()
    comment.delete()
    logger.info(f"Comment {comment_id} deleted by user {user.id} at {timezone.now()}")
