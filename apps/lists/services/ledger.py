"""
List totals ledger.

``compute_totals`` is pure: it sums ``price * quantity`` over a set of items,
NEEDED and OPTIONAL lines into the expected total and PURCHASED lines into
the actual total. Malformed values never raise; a price or quantity that
cannot be read counts as zero. Rounding to cents (half up) happens once, on
the final sums.

``recompute_list_totals`` is the transactional read-modify-write around it
and must run in the same transaction as the item mutation that triggered it.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, NamedTuple
from uuid import UUID

from django.db import transaction

from apps.lists.models import ItemStatus, ShoppingList

from .exceptions import ListNotFoundError

CENT = Decimal('0.01')
ZERO = Decimal('0')

EXPECTED_STATUSES = frozenset({ItemStatus.NEEDED.value, ItemStatus.OPTIONAL.value})
ACTUAL_STATUSES = frozenset({ItemStatus.PURCHASED.value})


class Totals(NamedTuple):
    expected_total: Decimal
    actual_total: Decimal


def coerce_price(value) -> Decimal:
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return price if price.is_finite() else ZERO


def coerce_quantity(value) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError, OverflowError):
        return 0


def _get(item, name):
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def compute_totals(items: Iterable) -> Totals:
    """
    Compute the (expected, actual) totals of ``items``.

    Items may be model instances or mappings with ``price``, ``quantity``
    and ``status``. Items with an unknown status contribute to neither total.
    """
    expected = ZERO
    actual = ZERO

    for item in items:
        line = coerce_price(_get(item, 'price')) * coerce_quantity(_get(item, 'quantity'))
        status = _get(item, 'status')
        if status in EXPECTED_STATUSES:
            expected += line
        elif status in ACTUAL_STATUSES:
            actual += line

    return Totals(
        expected_total=expected.quantize(CENT, rounding=ROUND_HALF_UP),
        actual_total=actual.quantize(CENT, rounding=ROUND_HALF_UP),
    )


@transaction.atomic
def recompute_list_totals(*, list_id: UUID) -> ShoppingList:
    """
    Recompute and persist the totals of a list from its current items.

    Locks the list row so concurrent item mutations serialize their
    recomputes instead of overwriting each other.

    Raises:
        ListNotFoundError: If the list does not exist
    """
    try:
        shopping_list = (
            ShoppingList.objects
            .select_for_update()
            .get(id=list_id)
        )
    except ShoppingList.DoesNotExist:
        raise ListNotFoundError(f"List with ID {list_id} not found")

    totals = compute_totals(
        shopping_list.items.values('price', 'quantity', 'status')
    )
    shopping_list.expected_total = totals.expected_total
    shopping_list.actual_total = totals.actual_total
    shopping_list.save(update_fields=['expected_total', 'actual_total', 'updated_at'])

    return shopping_list
