# projects/models.py
import uuid

from django.core.validators import RegexValidator
from django.db import models

from accounts.models import User

hex_color_validator = RegexValidator(r'^#[0-9A-Fa-f]{6}$', 'Invalid color format, expected #RRGGBB.')


class Project(models.Model):
    DEFAULT_COLOR = '#4F46E5'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500, null=True, blank=True)
    color = models.CharField(max_length=7, default=DEFAULT_COLOR, validators=[hex_color_validator])
    is_archived = models.BooleanField(default=False)
    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name='owned_projects')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-updated_at']

    def __str__(self):
        return self.name


class ProjectMember(models.Model):
    OWNER = 'OWNER'
    ADMIN = 'ADMIN'
    MEMBER = 'MEMBER'
    VIEWER = 'VIEWER'
    ROLE_CHOICES = [
        (OWNER, 'Owner'),
        (ADMIN, 'Admin'),
        (MEMBER, 'Member'),
        (VIEWER, 'Viewer'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='project_memberships')
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='members')
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=MEMBER)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_members'
        unique_together = ('user', 'project')
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user} - {self.role} in {self.project}"
