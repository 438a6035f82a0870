# workspace/tasks/services.py
"""
Task lifecycle and ordering.

New tasks and tasks moved to another column are appended at the end of the
target column. An explicit position is honoured only when the task stays in
its column. `completed_at` follows the DONE status.
"""
import logging

from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from projects.models import ProjectMember
from projects.permissions import require_member, require_role
from projects.services import load_project
from workspace.board.services import load_column
from workspace.ordering import apply_order, next_position, place
from .models import Task

logger = logging.getLogger(__name__)

_UNSET = object()


def load_task(task_id):
    try:
        return Task.objects.select_related('column__board__project', 'creator', 'assignee').get(id=task_id)
    except Task.DoesNotExist:
        raise NotFound('Task not found.')


def _check_assignee(project, assignee_id):
    if assignee_id is None:
        return None
    if not ProjectMember.objects.filter(project=project, user_id=assignee_id).exists():
        raise ValidationError({'assignee_id': ['Assignee is not a member of this project.']})
    return assignee_id


def create_task(column_id, user, title, description=None, priority=None, due_date=None,
                start_date=None, assignee_id=None):
    column = load_column(column_id)
    project = column.project
    require_role(project, user, 'task.write')
    _check_assignee(project, assignee_id)

    with transaction.atomic():
        task = Task.objects.create(
            column=column,
            title=title,
            description=description,
            priority=priority or Task.MEDIUM,
            status=Task.TODO,
            due_date=due_date,
            start_date=start_date,
            creator=user,
            assignee_id=assignee_id,
            position=next_position(column.tasks.all()),
        )
    logger.info(f"Task {task.id} created in column {column.id} at position {task.position} by user {user.id} at {timezone.now()}")
    return load_task(task.id)


def get_task(task_id, user):
    task = load_task(task_id)
    require_member(task.project, user)
    return task


def update_task(task_id, user, **patch):
    task = load_task(task_id)
    project = task.project
    require_role(project, user, 'task.write')

    column_id = patch.pop('column_id', None)
    position = patch.pop('position', None)
    assignee_id = patch.pop('assignee_id', _UNSET)
    status = patch.get('status')

    if assignee_id is not _UNSET:
        task.assignee_id = _check_assignee(project, assignee_id)

    if status is not None:
        if status == Task.DONE and task.status != Task.DONE:
            task.completed_at = timezone.now()
        elif status != Task.DONE:
            task.completed_at = None

    for name, value in patch.items():
        setattr(task, name, value)

    with transaction.atomic():
        if column_id is not None and column_id != task.column_id:
            target = load_column(column_id)
            if target.board.project_id != project.id:
                raise NotFound('Target column not found in this project.')
            if position is not None:
                logger.debug(f"Ignoring position {position} for task {task.id}, column changes append")
            task.column = target
            task.position = next_position(target.tasks.all())
        elif position is not None:
            place(task, task.column.tasks.all(), position)
        task.save()

    logger.info(f"Task {task.id} updated by user {user.id} at {timezone.now()}")
    return load_task(task.id)


def move_task(task_id, user, target_column_id, target_position):
    """
    Move a task to another column or position.

    `target_position` only applies within the same column; moving across
    columns appends like `update_task`.
    """
    return update_task(task_id, user, column_id=target_column_id, position=target_position)


def reorder_tasks(column_id, user, task_ids):
    column = load_column(column_id)
    require_role(column.project, user, 'task.write')
    apply_order(column.tasks.all(), task_ids, field='task_ids')
    return column.tasks.select_related('creator', 'assignee').order_by('position')


def delete_task(task_id, user):
    task = load_task(task_id)
    require_role(task.project, user, 'task.write')
    task.delete()
    logger.info(f"Task {task_id} deleted by user {user.id} at {timezone.now()}")


def list_project_tasks(project_id, user, assignee_id=None, priority=None, status=None,
                       due_after=None, due_before=None, search=None):
    project = load_project(project_id)
    require_member(project, user)

    tasks = Task.objects.filter(column__board__project=project)
    if assignee_id:
        tasks = tasks.filter(assignee_id=assignee_id)
    if priority:
        tasks = tasks.filter(priority=priority)
    if status:
        tasks = tasks.filter(status=status)
    if due_after:
        tasks = tasks.filter(due_date__gte=due_after)
    if due_before:
        tasks = tasks.filter(due_date__lte=due_before)
    if search:
        tasks = tasks.filter(Q(title__icontains=search) | Q(description__icontains=search))

    return (
        tasks
        .select_related('creator', 'assignee', 'column')
        .order_by('column__position', 'position')
    )


def get_task_statistics(project_id, user):
    project = load_project(project_id)
    require_member(project, user)

    tasks = Task.objects.filter(column__board__project=project)
    by_status = {value: 0 for value, _ in Task.STATUS_CHOICES}
    for row in tasks.order_by().values('status').annotate(count=Count('id')):
        by_status[row['status']] = row['count']
    by_priority = {value: 0 for value, _ in Task.PRIORITY_CHOICES}
    for row in tasks.order_by().values('priority').annotate(count=Count('id')):
        by_priority[row['priority']] = row['count']

    return {
        'total': sum(by_status.values()),
        'by_status': by_status,
        'by_priority': by_priority,
    }
