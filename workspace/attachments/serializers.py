# workspace/attachments/serializers.py
from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from .models import Attachment


class AttachmentSerializer(serializers.ModelSerializer):
    task_id = serializers.UUIDField(read_only=True)
    uploaded_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = Attachment
        fields = ['id', 'task_id', 'filename', 'original_name', 'mime_type', 'size', 'uploaded_by', 'created_at']
        read_only_fields = fields


class UploadSerializer(serializers.Serializer):
    file = serializers.FileField(allow_empty_file=False)
