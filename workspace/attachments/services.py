# workspace/attachments/services.py
"""
Task attachments. Bytes go through Django's storage API under a generated
unique name; the row keeps the original filename and MIME type for download.
"""
import logging

from django.conf import settings
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from projects.permissions import is_allowed, require_member, require_role, resolve_role
from tracker.exceptions import AccessDenied
from workspace.tasks.services import load_task
from .models import Attachment, generate_filename

logger = logging.getLogger(__name__)

# Room for the multipart boundary, part headers and form fields
MULTIPART_ALLOWANCE = 64 * 1024


def check_size(size):
    if size is not None and size > settings.MAX_FILE_SIZE:
        raise ValidationError({'file': [f"File too large, the limit is {settings.MAX_FILE_SIZE} bytes."]})


def check_request_size(content_length):
    """Reject a request body that cannot hold a file within the limit."""
    if content_length > settings.MAX_FILE_SIZE + MULTIPART_ALLOWANCE:
        logger.warning(f"Rejected upload body of {content_length} bytes at {timezone.now()}")
        raise ValidationError({'file': [f"File too large, the limit is {settings.MAX_FILE_SIZE} bytes."]})


def check_mime_type(mime_type):
    if mime_type not in settings.ALLOWED_UPLOAD_TYPES:
        raise ValidationError({'file': [f"Invalid file type: {mime_type}."]})


def load_attachment(attachment_id):
    try:
        return Attachment.objects.select_related('task__column__board__project', 'uploaded_by').get(id=attachment_id)
    except Attachment.DoesNotExist:
        raise NotFound('Attachment not found.')


def list_attachments(task_id, user):
    task = load_task(task_id)
    require_member(task.project, user)
    return task.attachments.select_related('uploaded_by').order_by('-created_at')


def upload_attachment(task_id, user, uploaded_file):
    task = load_task(task_id)
    require_role(task.project, user, 'attachment.upload')
    check_size(uploaded_file.size)
    check_mime_type(uploaded_file.content_type)

    attachment = Attachment(
        task=task,
        uploaded_by=user,
        filename=generate_filename(uploaded_file.name),
        original_name=uploaded_file.name,
        mime_type=uploaded_file.content_type,
        size=uploaded_file.size,
    )
    attachment.file.save(attachment.filename, uploaded_file, save=False)
    attachment.save()
    logger.info(f"Attachment {attachment.id} ({attachment.size} bytes) uploaded to task {task.id} by user {user.id} at {timezone.now()}")
    return attachment


def download_attachment(attachment_id, user):
    """Return the attachment with its file opened for reading."""
    attachment = load_attachment(attachment_id)
    project = attachment.task.project
    if resolve_role(project, user) is None:
        logger.warning(f"User {user.id} denied download of attachment {attachment.id} at {timezone.now()}")
        raise AccessDenied()
    if not attachment.file or not attachment.file.storage.exists(attachment.file.name):
        logger.error(f"Attachment {attachment.id} has no stored bytes at {attachment.file.name}")
        raise NotFound('File not found.')
    attachment.file.open('rb')
    return attachment


def delete_attachment(attachment_id, user):
    """Uploaders delete their own files; OWNER and ADMIN delete any."""
    attachment = load_attachment(attachment_id)
    role = require_member(attachment.task.project, user)
    if attachment.uploaded_by_id != user.id and not is_allowed(role, 'attachment.moderate'):
        logger.warning(f"User {user.id} with role {role} denied deleting attachment {attachment.id} at {timezone.now()}")
        raise AccessDenied()
    attachment.delete()
    logger.info(f"Attachment {attachment_id} deleted by user {user.id} at {timezone.now()}")
