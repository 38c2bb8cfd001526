from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.core.responses import success_response
from apps.invitations.serializers import InvitationSerializer
from apps.invitations.services import get_group_invitation_history
from apps.lists.serializers import (
    ItemCreateSerializer,
    ShoppingListSerializer,
    item_with_totals,
)

from .serializers import (
    GroupMemberSerializer,
    GroupSerializer,
    GroupUpdateSerializer,
    LeaveGroupResponseSerializer,
    UserGroupSerializer,
)
from .services import (
    add_group_item,
    clear_group_list,
    disband_group,
    get_group_list,
    get_group_members,
    get_member_group,
    leave_group,
    list_groups_of,
    update_group,
)

UUID_PATTERN = '[0-9a-fA-F-]{36}'


class GroupViewSet(viewsets.ViewSet):
    """
    ViewSet for groups the requesting user belongs to.

    Groups are never created here: accepting a START_GROUP invitation
    creates them.

    list: Groups of the current user
    retrieve: Group details
    update: Rename and/or replace the image
    destroy: Disband the group
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(responses={200: UserGroupSerializer(many=True)}, tags=['groups'])
    def list(self, request):
        memberships = list_groups_of(user=request.user)
        return success_response(
            UserGroupSerializer(memberships, many=True).data,
            'Groups retrieved successfully'
        )

    @extend_schema(responses={200: GroupSerializer}, tags=['groups'])
    def retrieve(self, request, pk=None):
        group = get_member_group(group_id=pk, user=request.user)
        return success_response(GroupSerializer(group).data, 'Group retrieved successfully')

    @extend_schema(request=GroupUpdateSerializer, responses={200: GroupSerializer}, tags=['groups'])
    def update(self, request, pk=None):
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        update_group(group_id=pk, user=request.user, **serializer.validated_data)
        group = get_member_group(group_id=pk, user=request.user)
        return success_response(GroupSerializer(group).data, 'Group updated successfully')

    @extend_schema(tags=['groups'])
    def destroy(self, request, pk=None):
        disband_group(group_id=pk, user=request.user)
        return success_response(None, 'Group disbanded successfully')

    @extend_schema(responses={200: ShoppingListSerializer}, tags=['groups'])
    @action(detail=True, methods=['get'], url_path='list')
    def shared_list(self, request, pk=None):
        """Shared list with items and totals."""
        shopping_list = get_group_list(group_id=pk, user=request.user)
        return success_response(
            ShoppingListSerializer(shopping_list).data,
            'Group list retrieved successfully'
        )

    @extend_schema(request=ItemCreateSerializer, tags=['groups'])
    @action(detail=True, methods=['post'], url_path='list/items')
    def add_item(self, request, pk=None):
        serializer = ItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = add_group_item(group_id=pk, user=request.user, **serializer.validated_data)
        return success_response(
            item_with_totals(item),
            'Item added successfully',
            status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: ShoppingListSerializer}, tags=['groups'])
    @action(detail=True, methods=['put'], url_path='list/clear')
    def clear(self, request, pk=None):
        clear_group_list(group_id=pk, user=request.user)
        shopping_list = get_group_list(group_id=pk, user=request.user)
        return success_response(
            ShoppingListSerializer(shopping_list).data,
            'Group list cleared successfully'
        )

    @extend_schema(responses={200: GroupMemberSerializer(many=True)}, tags=['groups'])
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        memberships = list(get_group_members(group_id=pk, user=request.user))
        return success_response({
            'members': GroupMemberSerializer(memberships, many=True).data,
            'count': len(memberships),
        }, 'Group members retrieved successfully')

    @extend_schema(tags=['groups'])
    @action(detail=True, methods=['get'])
    def invitations(self, request, pk=None):
        """Every invitation referencing the group, with per-status counts."""
        history = get_group_invitation_history(group_id=pk, user=request.user)
        return success_response({
            'invitations': InvitationSerializer(history.invitations, many=True).data,
            'total': history.total,
            'pending': history.pending,
            'accepted': history.accepted,
            'declined': history.declined,
        }, 'Group invitations retrieved successfully')

    @extend_schema(responses={200: LeaveGroupResponseSerializer}, tags=['groups'])
    @action(detail=True, methods=['delete'])
    def leave(self, request, pk=None):
        """Leave the group; a group left with one member is disbanded."""
        result = leave_group(group_id=pk, user=request.user)
        message = 'Group disbanded' if result.disbanded else 'Left group successfully'
        return success_response(LeaveGroupResponseSerializer(result).data, message)
