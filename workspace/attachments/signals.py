# workspace/attachments/signals.py
import logging

from django.db.models.signals import post_delete
from django.dispatch import receiver

from .models import Attachment

logger = logging.getLogger(__name__)


@receiver(post_delete, sender=Attachment)
def attachment_deleted(sender, instance, **kwargs):
    """Remove the stored bytes once the row is gone. Failures are logged, not raised."""
    if not instance.file:
        return
    try:
        instance.file.delete(save=False)
        logger.info(f"Removed stored file {instance.filename} of attachment {instance.id}")
    except OSError as e:
        logger.error(f"Failed to remove stored file {instance.filename} of attachment {instance.id}: {str(e)}")
