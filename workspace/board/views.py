# workspace/board/views.py
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from projects.permissions import HasProjectRole
from tracker.responses import envelope
from . import services
from .serializers import (
    BoardCreateSerializer,
    BoardSerializer,
    BoardUpdateSerializer,
    ColumnCreateSerializer,
    ColumnSerializer,
    ColumnUpdateSerializer,
    ReorderColumnsSerializer,
)


class ProjectBoardsView(APIView):
    permission_classes = [IsAuthenticated, HasProjectRole]
    project_kwarg = 'project_id'
    project_actions = {'post': 'board.manage'}

    def get(self, request, project_id):
        boards = services.list_boards(project_id, request.user)
        return envelope(BoardSerializer(boards, many=True).data, message='Boards retrieved successfully')

    def post(self, request, project_id):
        serializer = BoardCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        board = services.create_board(project_id, request.user, **serializer.validated_data)
        return envelope(BoardSerializer(board).data, message='Board created successfully', status=status.HTTP_201_CREATED)


class BoardDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, pk):
        serializer = BoardUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        board = services.update_board(pk, request.user, **serializer.validated_data)
        return envelope(BoardSerializer(board).data, message='Board updated successfully')

    def delete(self, request, pk):
        services.delete_board(pk, request.user)
        return envelope(message='Board deleted successfully')


class BoardColumnsView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = ColumnCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        column = services.create_column(pk, request.user, **serializer.validated_data)
        return envelope(ColumnSerializer(column).data, message='Column created successfully', status=status.HTTP_201_CREATED)


class ColumnDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, pk):
        serializer = ColumnUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        column = services.update_column(pk, request.user, **serializer.validated_data)
        return envelope(ColumnSerializer(column).data, message='Column updated successfully')

    def delete(self, request, pk):
        services.delete_column(pk, request.user)
        return envelope(message='Column deleted successfully')


class ReorderColumnsView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, board_id):
        serializer = ReorderColumnsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        columns = services.reorder_columns(board_id, request.user, serializer.validated_data['column_ids'])
        return envelope(ColumnSerializer(columns, many=True).data, message='Columns reordered successfully')
