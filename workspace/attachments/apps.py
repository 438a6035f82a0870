from django.apps import AppConfig


class AttachmentsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'workspace.attachments'
    label = 'attachments'

    def ready(self):
        import workspace.attachments.signals  # noqa: F401
