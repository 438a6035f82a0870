# workspace/board/models.py
import uuid

from django.db import models

from projects.models import Project, hex_color_validator


class Board(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='boards')
    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500, blank=True, null=True)
    position = models.IntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'boards'
        ordering = ['position']
        constraints = [
            models.UniqueConstraint(fields=['project', 'position'], name='unique_board_position'),
        ]

    def __str__(self):
        return self.name


class Column(models.Model):
    DEFAULT_COLOR = '#6B7280'
    # name, color
    DEFAULT_COLUMNS = [
        ('To Do', '#6B7280'),
        ('In Progress', '#F59E0B'),
        ('Done', '#10B981'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    board = models.ForeignKey(Board, on_delete=models.CASCADE, related_name='columns')
    name = models.CharField(max_length=50)
    color = models.CharField(max_length=7, default=DEFAULT_COLOR, validators=[hex_color_validator])
    position = models.IntegerField()
    limit = models.PositiveIntegerField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'columns'
        ordering = ['position']
        constraints = [
            models.UniqueConstraint(fields=['board', 'position'], name='unique_column_position'),
        ]

    def __str__(self):
        return f"{self.board.name} / {self.name}"

    @property
    def project(self):
        return self.board.project
