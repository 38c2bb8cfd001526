from django.conf import settings
from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Group, GroupMembership


class GroupMinimalSerializer(serializers.ModelSerializer):
    """Minimal group info for nested serialization."""

    class Meta:
        model = Group
        fields = ['id', 'name', 'group_code', 'group_image']
        read_only_fields = fields


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    list_id = serializers.SerializerMethodField()
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'group_code',
            'group_image',
            'list_id',
            'member_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_list_id(self, obj):
        shopping_list = getattr(obj, 'shopping_list', None)
        return str(shopping_list.id) if shopping_list else None

    def get_member_count(self, obj):
        """Use the annotation when present."""
        count = getattr(obj, 'member_count', None)
        return count if count is not None else obj.memberships.count()


class GroupMemberSerializer(serializers.ModelSerializer):
    """Member of a group."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['id', 'user', 'joined_at']
        read_only_fields = fields


class UserGroupSerializer(serializers.ModelSerializer):
    """A user's membership, presented as the group it points to."""

    group = GroupMinimalSerializer(read_only=True)
    member_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['group', 'member_count', 'joined_at']
        read_only_fields = fields


class GroupUpdateSerializer(serializers.Serializer):
    """Group update; multipart when a new image is sent."""

    name = serializers.CharField(max_length=200, required=False)
    group_image = serializers.ImageField(required=False)

    def validate_group_image(self, value):
        if value.size > settings.MAX_GROUP_IMAGE_SIZE:
            limit_mb = settings.MAX_GROUP_IMAGE_SIZE // (1024 * 1024)
            raise serializers.ValidationError(f'Group image must be at most {limit_mb}MB')
        return value

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('At least one field must be provided')
        return attrs


class LeaveGroupResponseSerializer(serializers.Serializer):
    remaining_members = serializers.IntegerField()
    disbanded = serializers.BooleanField()
