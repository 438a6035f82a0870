# workspace/comments/serializers.py
from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from .models import Comment


class CommentSerializer(serializers.ModelSerializer):
    task_id = serializers.UUIDField(read_only=True)
    author = UserSummarySerializer(read_only=True)

    class Meta:
        model = Comment
        fields = ['id', 'task_id', 'content', 'edited', 'author', 'created_at', 'updated_at']
        read_only_fields = fields


class CommentInputSerializer(serializers.Serializer):
    content = serializers.CharField(min_length=1, max_length=1000)
