# workspace/comments/views.py
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from tracker.responses import envelope
from . import services
from .serializers import CommentInputSerializer, CommentSerializer


class TaskCommentsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, task_id):
        comments = services.list_comments(task_id, request.user)
        return envelope(CommentSerializer(comments, many=True).data, message='Comments retrieved successfully')

    def post(self, request, task_id):
        serializer = CommentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = services.add_comment(task_id, request.user, serializer.validated_data['content'])
        return envelope(CommentSerializer(comment).data, message='Comment added successfully', status=status.HTTP_201_CREATED)


class CommentDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, pk):
        serializer = CommentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = services.edit_comment(pk, request.user, serializer.validated_data['content'])
        return envelope(CommentSerializer(comment).data, message='Comment updated successfully')

    def delete(self, request, pk):
        services.delete_comment(pk, request.user)
        return envelope(message='Comment deleted successfully')
