# workspace/tasks/serializers.py
from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from workspace.attachments.serializers import AttachmentSerializer
from workspace.comments.serializers import CommentSerializer
from .models import Task


class TaskSerializer(serializers.ModelSerializer):
    column_id = serializers.UUIDField(read_only=True)
    creator = UserSummarySerializer(read_only=True)
    assignee = UserSummarySerializer(read_only=True)

    class Meta:
        model = Task
        fields = [
            'id', 'column_id', 'title', 'description', 'priority', 'status', 'position',
            'due_date', 'start_date', 'completed_at', 'creator', 'assignee', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class TaskDetailSerializer(TaskSerializer):
    comments = serializers.SerializerMethodField()
    attachments = serializers.SerializerMethodField()

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ['comments', 'attachments']
        read_only_fields = fields

    def get_comments(self, obj):
        return CommentSerializer(obj.comments.select_related('author'), many=True).data

    def get_attachments(self, obj):
        return AttachmentSerializer(obj.attachments.select_related('uploaded_by'), many=True).data


class TaskCreateSerializer(serializers.Serializer):
    column_id = serializers.UUIDField()
    title = serializers.CharField(min_length=1, max_length=200)
    description = serializers.CharField(max_length=2000, required=False, allow_null=True, allow_blank=True)
    priority = serializers.ChoiceField(choices=Task.PRIORITY_CHOICES, required=False)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    start_date = serializers.DateTimeField(required=False, allow_null=True)
    assignee_id = serializers.UUIDField(required=False, allow_null=True)


class TaskUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(min_length=1, max_length=200, required=False)
    description = serializers.CharField(max_length=2000, required=False, allow_null=True, allow_blank=True)
    priority = serializers.ChoiceField(choices=Task.PRIORITY_CHOICES, required=False)
    status = serializers.ChoiceField(choices=Task.STATUS_CHOICES, required=False)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    start_date = serializers.DateTimeField(required=False, allow_null=True)
    assignee_id = serializers.UUIDField(required=False, allow_null=True)
    column_id = serializers.UUIDField(required=False)
    position = serializers.IntegerField(min_value=0, required=False)


class MoveTaskSerializer(serializers.Serializer):
    target_column_id = serializers.UUIDField()
    target_position = serializers.IntegerField(min_value=0)


class ReorderTasksSerializer(serializers.Serializer):
    task_ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)


class TaskFilterSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    assignee_id = serializers.UUIDField(required=False)
    priority = serializers.ChoiceField(choices=Task.PRIORITY_CHOICES, required=False)
    status = serializers.ChoiceField(choices=Task.STATUS_CHOICES, required=False)
    due_after = serializers.DateTimeField(required=False)
    due_before = serializers.DateTimeField(required=False)
    search = serializers.CharField(max_length=200, required=False, allow_blank=True)
