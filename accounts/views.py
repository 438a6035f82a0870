# accounts/views.py
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from tracker.responses import envelope
from . import services
from .serializers import (
    ChangePasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class RegisterAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_scope = 'auth'

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = services.register(**serializer.validated_data)
        return envelope(
            {'user': UserSerializer(user).data, 'token': token},
            message='User registered successfully',
            status=status.HTTP_201_CREATED,
        )


class LoginAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_scope = 'auth'

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = services.login(**serializer.validated_data)
        return envelope({'user': UserSerializer(user).data, 'token': token}, message='Login successful')


class LogoutAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        # Tokens are stateless; the client discards its copy
        logger.info(f"User {request.user.id} logged out at {timezone.now()}")
        return envelope(message='Logout successful')


class MeAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return envelope(UserSerializer(request.user).data, message='User retrieved successfully')

    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = services.update_profile(request.user, **serializer.validated_data)
        return envelope(UserSerializer(user).data, message='Profile updated successfully')

    def delete(self, request):
        services.delete_account(request.user)
        return envelope(message='Account deleted successfully')


class ChangePasswordAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.change_password(request.user, **serializer.validated_data)
        return envelope(message='Password changed successfully')
