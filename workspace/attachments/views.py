# workspace/attachments/views.py
import logging

from django.http import FileResponse
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from tracker.responses import envelope
from . import services
from .serializers import AttachmentSerializer, UploadSerializer

logger = logging.getLogger(__name__)


class AttachmentView(APIView):
    """
    GET and POST take a task id: list or upload that task's attachments.
    DELETE takes an attachment id.
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def get(self, request, pk):
        attachments = services.list_attachments(pk, request.user)
        return envelope(AttachmentSerializer(attachments, many=True).data, message='Attachments retrieved successfully')

    def post(self, request, pk):
        # Reject before the multipart body is parsed
        content_length = request.META.get('CONTENT_LENGTH')
        if content_length and content_length.isdigit():
            services.check_request_size(int(content_length))

        serializer = UploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        attachment = services.upload_attachment(pk, request.user, serializer.validated_data['file'])
        return envelope(
            AttachmentSerializer(attachment).data,
            message='File uploaded successfully',
            status=status.HTTP_201_CREATED,
        )

    def delete(self, request, pk):
        services.delete_attachment(pk, request.user)
        return envelope(message='Attachment deleted successfully')


class AttachmentDownloadView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        attachment = services.download_attachment(pk, request.user)
        logger.info(f"Attachment {attachment.id} downloaded by user {request.user.id}")
        return FileResponse(
            attachment.file,
            as_attachment=True,
            filename=attachment.original_name,
            content_type=attachment.mime_type,
        )
