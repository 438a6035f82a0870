# projects/views.py
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from tracker.responses import envelope
from . import services
from .permissions import HasProjectRole
from .serializers import (
    AddMemberSerializer,
    ChangeRoleSerializer,
    MemberSerializer,
    ProjectCreateSerializer,
    ProjectDetailSerializer,
    ProjectSerializer,
    ProjectUpdateSerializer,
)

logger = logging.getLogger(__name__)


class ProjectListCreateView(APIView):
    """
    GET: non-archived projects the caller belongs to, most recently updated first.
    POST: create a project owned by the caller.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        logger.debug(f"Listing projects for user {request.user.id}")
        projects = services.list_projects(request.user)
        serializer = ProjectSerializer(projects, many=True, context={'request': request})
        return envelope(serializer.data, message='Projects retrieved successfully')

    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = services.create_project(request.user, **serializer.validated_data)
        return envelope(
            ProjectSerializer(project, context={'request': request}).data,
            message='Project created successfully',
            status=status.HTTP_201_CREATED,
        )


class ProjectDetailView(APIView):
    permission_classes = [IsAuthenticated, HasProjectRole]
    project_actions = {'put': 'project.update', 'delete': 'project.delete'}

    def get(self, request, pk):
        project = services.get_project(pk, request.user)
        serializer = ProjectDetailSerializer(project, context={'request': request})
        return envelope(serializer.data, message='Project retrieved successfully')

    def put(self, request, pk):
        serializer = ProjectUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        project = services.update_project(pk, request.user, **serializer.validated_data)
        return envelope(ProjectSerializer(project, context={'request': request}).data, message='Project updated successfully')

    def delete(self, request, pk):
        services.delete_project(pk, request.user)
        return envelope(message='Project deleted successfully')


class ProjectMemberCreateView(APIView):
    permission_classes = [IsAuthenticated, HasProjectRole]
    project_actions = {'post': 'member.manage'}

    def post(self, request, pk):
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        membership = services.add_member(
            pk, request.user, serializer.validated_data['user_id'], serializer.validated_data['role']
        )
        return envelope(MemberSerializer(membership).data, message='Member added successfully', status=status.HTTP_201_CREATED)


class ProjectMemberDetailView(APIView):
    permission_classes = [IsAuthenticated, HasProjectRole]
    project_actions = {'put': 'member.manage', 'delete': 'member.manage'}

    def put(self, request, pk, user_id):
        serializer = ChangeRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        membership = services.change_member_role(pk, request.user, user_id, serializer.validated_data['role'])
        return envelope(MemberSerializer(membership).data, message='Member role updated successfully')

    def delete(self, request, pk, user_id):
        services.remove_member(pk, request.user, user_id)
        return envelope(message='Member removed successfully')
