from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.core.responses import success_response
from apps.groups.serializers import GroupSerializer, GroupMemberSerializer

from .serializers import (
    InvitationSerializer,
    SendInviteSerializer,
    SendRequestSerializer,
    StartGroupSerializer,
)
from .services import (
    accept_invitation,
    cancel_invitation,
    decline_invitation,
    get_invitation,
    send_invite,
    send_request,
    start_group,
)

UUID_PATTERN = '[0-9a-fA-F-]{36}'


class InvitationViewSet(viewsets.ViewSet):
    """
    ViewSet for invitations.

    invite: GROUP_INVITE into a group you belong to
    request: JOIN_REQUEST, fanned out to every member of the group
    start-group: START_GROUP proposal to another user
    retrieve: Invitation details (sender or recipient)
    accept / decline: Recipient responses
    cancel: Sender withdrawal
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(request=SendInviteSerializer, responses={201: InvitationSerializer}, tags=['invitations'])
    @action(detail=False, methods=['post'])
    def invite(self, request):
        serializer = SendInviteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invitation = send_invite(from_user=request.user, **serializer.validated_data)
        return success_response(
            InvitationSerializer(invitation).data,
            'Invitation sent successfully',
            status.HTTP_201_CREATED
        )

    @extend_schema(request=SendRequestSerializer, tags=['invitations'])
    @action(detail=False, methods=['post'], url_path='request', url_name='request')
    def join_request(self, request):
        """Ask to join a group by code."""
        serializer = SendRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invitations = send_request(from_user=request.user, **serializer.validated_data)
        return success_response({
            'invitations': InvitationSerializer(invitations, many=True).data,
            'count': len(invitations),
        }, 'Join request sent successfully', status.HTTP_201_CREATED)

    @extend_schema(request=StartGroupSerializer, responses={201: InvitationSerializer}, tags=['invitations'])
    @action(detail=False, methods=['post'], url_path='start-group', url_name='start-group')
    def propose_group(self, request):
        serializer = StartGroupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invitation = start_group(from_user=request.user, **serializer.validated_data)
        return success_response(
            InvitationSerializer(invitation).data,
            'Group invitation sent successfully',
            status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: InvitationSerializer}, tags=['invitations'])
    def retrieve(self, request, pk=None):
        invitation = get_invitation(invitation_id=pk, user=request.user)
        return success_response(InvitationSerializer(invitation).data, 'Invitation retrieved successfully')

    @extend_schema(request=None, tags=['invitations'])
    @action(detail=True, methods=['post'])
    def accept(self, request, pk=None):
        result = accept_invitation(invitation_id=pk, user=request.user)
        return success_response({
            'invitation': InvitationSerializer(result.invitation).data,
            'group': GroupSerializer(result.group).data,
            'membership': GroupMemberSerializer(result.membership).data,
        }, 'Invitation accepted successfully')

    @extend_schema(request=None, responses={200: InvitationSerializer}, tags=['invitations'])
    @action(detail=True, methods=['post'])
    def decline(self, request, pk=None):
        invitation = decline_invitation(invitation_id=pk, user=request.user)
        return success_response(InvitationSerializer(invitation).data, 'Invitation declined successfully')

    @extend_schema(request=None, responses={200: InvitationSerializer}, tags=['invitations'])
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        invitation = cancel_invitation(invitation_id=pk, user=request.user)
        return success_response(InvitationSerializer(invitation).data, 'Invitation cancelled successfully')
