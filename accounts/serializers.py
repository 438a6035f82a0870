# accounts/serializers.py
from rest_framework import serializers

from .models import User

USERNAME_REGEX = r'^[A-Za-z0-9_]+$'


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'username', 'first_name', 'last_name', 'avatar', 'bio', 'created_at', 'updated_at']
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user representation embedded in projects, tasks and comments."""

    class Meta:
        model = User
        fields = ['id', 'username', 'first_name', 'last_name', 'avatar']
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=254)
    username = serializers.RegexField(
        USERNAME_REGEX, min_length=3, max_length=30,
        error_messages={'invalid': 'Username may only contain letters, numbers and underscores.'}
    )
    first_name = serializers.CharField(min_length=1, max_length=50)
    last_name = serializers.CharField(min_length=1, max_length=50)
    password = serializers.CharField(write_only=True, min_length=8, max_length=128, style={'input_type': 'password'})


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class ProfileUpdateSerializer(serializers.Serializer):
    username = serializers.RegexField(USERNAME_REGEX, min_length=3, max_length=30, required=False)
    first_name = serializers.CharField(min_length=1, max_length=50, required=False)
    last_name = serializers.CharField(min_length=1, max_length=50, required=False)
    avatar = serializers.URLField(max_length=500, required=False, allow_null=True, allow_blank=True)
    bio = serializers.CharField(max_length=500, required=False, allow_null=True, allow_blank=True)


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=8, max_length=128)

    def validate(self, data):
        if data['current_password'] == data['new_password']:
            raise serializers.ValidationError({'new_password': 'New password must differ from the current password.'})
        return data
