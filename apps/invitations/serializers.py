from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from apps.groups.serializers import GroupMinimalSerializer
from .models import Invitation


class InvitationSerializer(serializers.ModelSerializer):
    """Invitation with sender, recipient and group snippets."""

    from_user = UserMinimalSerializer(read_only=True)
    to_user = UserMinimalSerializer(read_only=True)
    group = GroupMinimalSerializer(read_only=True)

    class Meta:
        model = Invitation
        fields = [
            'id',
            'type',
            'status',
            'from_user',
            'to_user',
            'group',
            'group_name',
            'message',
            'created_at',
            'expires_at',
            'responded_at',
        ]
        read_only_fields = fields


class SendInviteSerializer(serializers.Serializer):
    """Invite a user (by code) into one of your groups."""

    to_user_code = serializers.CharField(max_length=7)
    group_id = serializers.UUIDField()
    message = serializers.CharField(required=False, allow_blank=True, default='')


class SendRequestSerializer(serializers.Serializer):
    """Ask to join a group by its code."""

    group_code = serializers.CharField(max_length=6)
    message = serializers.CharField(required=False, allow_blank=True, default='')


class StartGroupSerializer(serializers.Serializer):
    """Propose a new group to another user."""

    to_user_code = serializers.CharField(max_length=7)
    group_name = serializers.CharField(max_length=200)
    message = serializers.CharField(required=False, allow_blank=True, default='')
