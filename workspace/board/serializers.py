# workspace/board/serializers.py
from rest_framework import serializers

from projects.models import hex_color_validator
from workspace.tasks.serializers import TaskSerializer
from .models import Board, Column


class ColumnSerializer(serializers.ModelSerializer):
    board_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Column
        fields = ['id', 'board_id', 'name', 'color', 'position', 'limit', 'created_at', 'updated_at']
        read_only_fields = fields


class ColumnDetailSerializer(ColumnSerializer):
    tasks = TaskSerializer(many=True, read_only=True)

    class Meta(ColumnSerializer.Meta):
        fields = ColumnSerializer.Meta.fields + ['tasks']
        read_only_fields = fields


class BoardSerializer(serializers.ModelSerializer):
    project_id = serializers.UUIDField(read_only=True)
    columns = ColumnSerializer(many=True, read_only=True)

    class Meta:
        model = Board
        fields = ['id', 'project_id', 'name', 'description', 'position', 'columns', 'created_at', 'updated_at']
        read_only_fields = fields


class BoardDetailSerializer(BoardSerializer):
    columns = ColumnDetailSerializer(many=True, read_only=True)


class BoardCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_null=True, allow_blank=True)


class BoardUpdateSerializer(BoardCreateSerializer):
    name = serializers.CharField(min_length=1, max_length=100, required=False)
    position = serializers.IntegerField(min_value=0, required=False)


class ColumnCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=50)
    color = serializers.CharField(max_length=7, required=False, validators=[hex_color_validator])
    limit = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class ColumnUpdateSerializer(ColumnCreateSerializer):
    name = serializers.CharField(min_length=1, max_length=50, required=False)
    position = serializers.IntegerField(min_value=0, required=False)


class ReorderColumnsSerializer(serializers.Serializer):
    column_ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)
