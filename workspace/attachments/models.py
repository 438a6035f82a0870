# workspace/attachments/models.py
import os
import uuid

from django.db import models

from accounts.models import User
from workspace.tasks.models import Task


def generate_filename(original_name):
    """Unique storage name that keeps the original extension."""
    _, extension = os.path.splitext(original_name)
    return f"{uuid.uuid4()}{extension.lower()}"


def attachment_upload_to(instance, filename):
    return f"attachments/{instance.filename or generate_filename(filename)}"


class Attachment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='attachments')
    uploaded_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name='attachments')
    filename = models.CharField(max_length=255, unique=True)
    original_name = models.CharField(max_length=255)
    mime_type = models.CharField(max_length=100)
    size = models.PositiveIntegerField()
    file = models.FileField(upload_to=attachment_upload_to, max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'attachments'
        ordering = ['-created_at']

    def __str__(self):
        return self.original_name
