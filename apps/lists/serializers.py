import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Item, ItemStatus, ShoppingList

logger = logging.getLogger(__name__)

MAX_PRICE = Decimal('99999999.99')


class LenientPriceField(serializers.Field):
    """
    Price input that tolerates garbage.

    Unparseable values become ``None`` (no price) and are logged, matching
    the ledger's rule that an unreadable price counts as zero. Negative and
    oversized prices are still rejected.
    """

    def to_internal_value(self, data):
        if data is None or (isinstance(data, str) and not data.strip()):
            return None
        try:
            price = Decimal(str(data).strip())
        except (InvalidOperation, ValueError):
            logger.warning("Ignoring unparseable item price %r", data)
            return None
        if not price.is_finite():
            logger.warning("Ignoring non-finite item price %r", data)
            return None
        if price < 0:
            raise serializers.ValidationError('Price cannot be negative')
        if price > MAX_PRICE:
            raise serializers.ValidationError(f'Price cannot exceed {MAX_PRICE}')
        return price.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def to_representation(self, value):
        return None if value is None else str(value)


class ItemSerializer(serializers.ModelSerializer):
    """Item with its author snippet."""

    list_id = serializers.UUIDField(source='shopping_list_id', read_only=True)
    added_by = UserMinimalSerializer(read_only=True)
    price = LenientPriceField(allow_null=True, required=False)

    class Meta:
        model = Item
        fields = [
            'id',
            'list_id',
            'name',
            'quantity',
            'price',
            'status',
            'added_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ListTotalsSerializer(serializers.ModelSerializer):

    class Meta:
        model = ShoppingList
        fields = ['id', 'expected_total', 'actual_total']
        read_only_fields = fields


class ShoppingListSerializer(serializers.ModelSerializer):
    """List with totals and items (items must be prefetched)."""

    items = ItemSerializer(many=True, read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = ShoppingList
        fields = [
            'id',
            'owner_user',
            'owner_group',
            'expected_total',
            'actual_total',
            'item_count',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_item_count(self, obj):
        return len(obj.items.all())


class ItemCreateSerializer(serializers.Serializer):
    """Serializer for adding an item to a list."""

    name = serializers.CharField(max_length=200)
    quantity = serializers.IntegerField(min_value=1, default=1)
    price = LenientPriceField(required=False, allow_null=True, default=None)
    status = serializers.ChoiceField(choices=ItemStatus.choices, default=ItemStatus.NEEDED)


class ItemUpdateSerializer(serializers.Serializer):
    """Partial item update; at least one field is required."""

    name = serializers.CharField(max_length=200, required=False)
    quantity = serializers.IntegerField(min_value=1, required=False)
    price = LenientPriceField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=ItemStatus.choices, required=False)

    def validate(self, attrs):
        if not any(value is not None for value in attrs.values()):
            raise serializers.ValidationError('At least one field must be provided')
        return attrs


class ItemStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ItemStatus.choices)


def item_with_totals(item: Item) -> dict:
    """Response payload for an item mutation: the item and its list's new totals."""
    return {
        'item': ItemSerializer(item).data,
        'list': ListTotalsSerializer(item.shopping_list).data,
    }
