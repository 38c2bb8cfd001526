from django.conf import settings
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import User


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization ("added by", members, senders)."""

    class Meta:
        model = User
        fields = ['id', 'first_name', 'last_name', 'user_code', 'profile_pic']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'first_name',
            'last_name',
            'user_code',
            'profile_pic',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SignupSerializer(serializers.Serializer):
    """Serializer for user signup."""

    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class SigninSerializer(serializers.Serializer):
    """Serializer for user signin."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


class RefreshTokenSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class UserUpdateSerializer(serializers.Serializer):
    """Profile update; multipart when a new profile picture is sent."""

    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    profile_pic = serializers.ImageField(required=False)

    def validate_profile_pic(self, value):
        if value.size > settings.MAX_PROFILE_PIC_SIZE:
            limit_mb = settings.MAX_PROFILE_PIC_SIZE // (1024 * 1024)
            raise serializers.ValidationError(f'Profile picture must be at most {limit_mb}MB')
        return value

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('At least one field must be provided')
        return attrs


class TokensSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokensSerializer()
