from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.core.responses import success_response

from .serializers import (
    ItemSerializer,
    ItemStatusSerializer,
    ItemUpdateSerializer,
    ListTotalsSerializer,
    item_with_totals,
)
from .services import (
    delete_item,
    get_item,
    update_item_details,
    update_item_status,
)

UUID_PATTERN = '[0-9a-fA-F-]{36}'


class ItemViewSet(viewsets.ViewSet):
    """
    Single-item endpoints for personal and group lists.

    Access is checked by the services: the owner of a personal list or any
    member of the group owning a group list.

    retrieve: Get an item
    update: Update name, quantity, price and/or status
    destroy: Delete an item
    status: Update only the status
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(responses={200: ItemSerializer}, tags=['items'])
    def retrieve(self, request, pk=None):
        item = get_item(item_id=pk, user=request.user)
        return success_response(ItemSerializer(item).data, 'Item retrieved successfully')

    @extend_schema(request=ItemUpdateSerializer, tags=['items'])
    def update(self, request, pk=None):
        serializer = ItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = update_item_details(item_id=pk, user=request.user, **serializer.validated_data)
        return success_response(item_with_totals(item), 'Item updated successfully')

    @extend_schema(request=ItemUpdateSerializer, tags=['items'])
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(tags=['items'])
    def destroy(self, request, pk=None):
        deleted = delete_item(item_id=pk, user=request.user)
        return success_response({
            'item': deleted.item,
            'list': ListTotalsSerializer(deleted.shopping_list).data,
            'deleted_by': deleted.deleted_by,
        }, 'Item deleted successfully')

    @extend_schema(request=ItemStatusSerializer, tags=['items'])
    @action(detail=True, methods=['put', 'patch'])
    def status(self, request, pk=None):
        """Update the status of an item."""
        serializer = ItemStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = update_item_status(
            item_id=pk,
            user=request.user,
            status=serializer.validated_data['status']
        )
        return success_response(item_with_totals(item), 'Item status updated successfully')
