# workspace/tasks/views.py
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from tracker.responses import envelope
from . import services
from .serializers import (
    MoveTaskSerializer,
    ReorderTasksSerializer,
    TaskCreateSerializer,
    TaskDetailSerializer,
    TaskFilterSerializer,
    TaskSerializer,
    TaskUpdateSerializer,
)

logger = logging.getLogger(__name__)


class TaskListCreateView(APIView):
    """
    GET: tasks of one project (`?project_id=`), optionally filtered by
    assignee_id, priority, status, due_after, due_before and search.
    POST: create a task at the end of `column_id`.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        filters = TaskFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = dict(filters.validated_data)
        project_id = params.pop('project_id')
        logger.debug(f"Listing tasks of project {project_id} with filters {params}")
        tasks = services.list_project_tasks(project_id, request.user, **params)
        return envelope(TaskSerializer(tasks, many=True).data, message='Tasks retrieved successfully')

    def post(self, request):
        serializer = TaskCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        task = services.create_task(data.pop('column_id'), request.user, **data)
        return envelope(TaskSerializer(task).data, message='Task created successfully', status=status.HTTP_201_CREATED)


class TaskDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        task = services.get_task(pk, request.user)
        return envelope(TaskDetailSerializer(task).data, message='Task retrieved successfully')

    def put(self, request, pk):
        serializer = TaskUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        task = services.update_task(pk, request.user, **serializer.validated_data)
        return envelope(TaskSerializer(task).data, message='Task updated successfully')

    def delete(self, request, pk):
        services.delete_task(pk, request.user)
        return envelope(message='Task deleted successfully')


class MoveTaskView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = MoveTaskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        task = services.move_task(pk, request.user, **serializer.validated_data)
        return envelope(TaskSerializer(task).data, message='Task moved successfully')


class ReorderTasksView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, column_id):
        serializer = ReorderTasksSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tasks = services.reorder_tasks(column_id, request.user, serializer.validated_data['task_ids'])
        return envelope(TaskSerializer(tasks, many=True).data, message='Tasks reordered successfully')


class TaskStatisticsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, project_id):
        stats = services.get_task_statistics(project_id, request.user)
        return envelope(stats, message='Task statistics retrieved successfully')
