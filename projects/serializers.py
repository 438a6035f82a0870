# projects/serializers.py
from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from workspace.board.serializers import BoardDetailSerializer, BoardSerializer
from .models import Project, ProjectMember, hex_color_validator


class MemberSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = ProjectMember
        fields = ['id', 'user', 'role', 'created_at']
        read_only_fields = fields


class ProjectSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    members = MemberSerializer(many=True, read_only=True)
    boards = BoardSerializer(many=True, read_only=True)
    role = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description', 'color', 'is_archived', 'owner', 'members', 'boards', 'role',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_role(self, obj):
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            for membership in obj.members.all():
                if membership.user_id == request.user.id:
                    return membership.role
        return None


class ProjectDetailSerializer(ProjectSerializer):
    """Project with its full hierarchy: boards -> columns -> tasks."""
    boards = BoardDetailSerializer(many=True, read_only=True)


class ProjectCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_null=True, allow_blank=True)
    color = serializers.CharField(max_length=7, required=False, validators=[hex_color_validator])


class ProjectUpdateSerializer(ProjectCreateSerializer):
    name = serializers.CharField(min_length=1, max_length=100, required=False)
    is_archived = serializers.BooleanField(required=False)


class AddMemberSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    role = serializers.ChoiceField(
        choices=[ProjectMember.ADMIN, ProjectMember.MEMBER, ProjectMember.VIEWER],
        default=ProjectMember.MEMBER,
    )


class ChangeRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=[ProjectMember.ADMIN, ProjectMember.MEMBER, ProjectMember.VIEWER])
