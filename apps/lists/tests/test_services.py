"""
Service layer tests for items and lists.

Tests cover:
- Totals kept in step with every item mutation
- Access rules for personal and group lists
- Post-commit events for group lists
- Rollback of the whole mutation on failure
"""

import pytest
from decimal import Decimal
from uuid import uuid4
from unittest.mock import patch

from apps.lists.models import Item, ItemStatus
from apps.lists.services import (
    add_item,
    clear_list,
    delete_item,
    get_item,
    get_list_with_items,
    update_item_details,
    update_item_status,
)
from apps.lists.services.exceptions import (
    EmptyItemUpdateError,
    InvalidItemError,
    ItemNotFoundError,
    ListAccessDeniedError,
    ListNotFoundError,
)


@pytest.fixture
def milk(group_list, user):
    return add_item(
        list_id=group_list.id,
        user=user,
        name='Milk',
        quantity=2,
        price=Decimal('3.99'),
    )


# =============================================================================
# Totals through item mutations
# =============================================================================

@pytest.mark.django_db
class TestItemTotals:
    """Item add/update/delete keep the list totals current."""

    def test_add_item_updates_expected_total(self, group_list, user):
        item = add_item(
            list_id=group_list.id,
            user=user,
            name='Milk',
            quantity=2,
            price=Decimal('3.99'),
            status=ItemStatus.NEEDED,
        )

        group_list.refresh_from_db()
        assert group_list.expected_total == Decimal('7.98')
        assert group_list.actual_total == Decimal('0.00')
        assert item.shopping_list.expected_total == Decimal('7.98')
        assert item.added_by == user

    def test_purchase_moves_amount_to_actual(self, milk, user):
        update_item_status(item_id=milk.id, user=user, status=ItemStatus.PURCHASED)

        shopping_list = milk.shopping_list
        shopping_list.refresh_from_db()
        assert shopping_list.expected_total == Decimal('0.00')
        assert shopping_list.actual_total == Decimal('7.98')

    def test_delete_returns_totals_to_zero(self, milk, user):
        deleted = delete_item(item_id=milk.id, user=user)

        assert deleted.item['name'] == 'Milk'
        assert deleted.deleted_by['id'] == str(user.id)
        assert deleted.shopping_list.expected_total == Decimal('0.00')
        assert deleted.shopping_list.actual_total == Decimal('0.00')
        assert not Item.objects.filter(id=milk.id).exists()

    def test_update_quantity_and_price(self, milk, other_user):
        item = update_item_details(item_id=milk.id, user=other_user, quantity=3, price=Decimal('1.00'))

        assert item.quantity == 3
        assert item.shopping_list.expected_total == Decimal('3.00')

    def test_item_without_price_adds_nothing(self, personal_list, user):
        add_item(list_id=personal_list.id, user=user, name='Salt')

        personal_list.refresh_from_db()
        assert personal_list.expected_total == Decimal('0.00')

    def test_clear_list_zeroes_totals(self, milk, group_list, user):
        add_item(list_id=group_list.id, user=user, name='Bread', price=Decimal('2.00'))

        shopping_list = clear_list(list_id=group_list.id, user=user)

        assert shopping_list.items.count() == 0
        assert shopping_list.expected_total == Decimal('0.00')
        assert shopping_list.actual_total == Decimal('0.00')

    def test_failed_recompute_rolls_back_item(self, personal_list, user):
        """Item creation and totals are one unit: no item without totals."""
        with patch(
            'apps.lists.services.item_management.recompute_list_totals',
            side_effect=RuntimeError('boom')
        ):
            with pytest.raises(RuntimeError):
                add_item(list_id=personal_list.id, user=user, name='Milk', price=Decimal('1.00'))

        assert not Item.objects.filter(shopping_list=personal_list).exists()


# =============================================================================
# Validation
# =============================================================================

@pytest.mark.django_db
class TestItemValidation:

    def test_blank_name_rejected(self, personal_list, user):
        with pytest.raises(InvalidItemError):
            add_item(list_id=personal_list.id, user=user, name='   ')

    def test_zero_quantity_rejected(self, personal_list, user):
        with pytest.raises(InvalidItemError):
            add_item(list_id=personal_list.id, user=user, name='Milk', quantity=0)

    def test_negative_price_rejected(self, personal_list, user):
        with pytest.raises(InvalidItemError):
            add_item(list_id=personal_list.id, user=user, name='Milk', price=Decimal('-1'))

    def test_unknown_status_rejected(self, milk, user):
        with pytest.raises(InvalidItemError):
            update_item_status(item_id=milk.id, user=user, status='LOST')

    def test_empty_update_rejected(self, milk, user):
        with pytest.raises(EmptyItemUpdateError):
            update_item_details(item_id=milk.id, user=user)

    def test_missing_item(self, user):
        with pytest.raises(ItemNotFoundError):
            update_item_details(item_id=uuid4(), user=user, name='Tea')

    def test_missing_list(self, user):
        with pytest.raises(ListNotFoundError):
            add_item(list_id=uuid4(), user=user, name='Tea')


# =============================================================================
# Access
# =============================================================================

@pytest.mark.django_db
class TestListAccess:

    def test_member_can_read_group_item(self, milk, other_user):
        assert get_item(item_id=milk.id, user=other_user).id == milk.id

    def test_non_member_cannot_read_group_item(self, milk, outsider):
        with pytest.raises(ListAccessDeniedError):
            get_item(item_id=milk.id, user=outsider)

    def test_non_member_cannot_add_to_group_list(self, group_list, outsider):
        with pytest.raises(ListAccessDeniedError):
            add_item(list_id=group_list.id, user=outsider, name='Cake')

    def test_other_user_cannot_touch_personal_list(self, personal_list, other_user):
        with pytest.raises(ListAccessDeniedError):
            get_list_with_items(list_id=personal_list.id, user=other_user)

    def test_non_member_cannot_delete(self, milk, outsider):
        with pytest.raises(ListAccessDeniedError):
            delete_item(item_id=milk.id, user=outsider)

        assert Item.objects.filter(id=milk.id).exists()


# =============================================================================
# Events
# =============================================================================

@pytest.mark.django_db
class TestListEvents:
    """Group list mutations are announced on the group channel after commit."""

    def test_add_item_announced(self, group, group_list, user, outbox, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            item = add_item(list_id=group_list.id, user=user, name='Milk', price=Decimal('3.99'))

        assert len(outbox) == 1
        delivery = outbox[0]
        assert delivery.channel == f'group:{group.id}'
        assert delivery.event == 'list_item_added'
        assert delivery.payload['item']['id'] == str(item.id)
        assert delivery.payload['addedBy']['user_code'] == user.user_code

    def test_update_delete_and_clear_announced(self, milk, group_list, user, outbox, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            update_item_status(item_id=milk.id, user=user, status=ItemStatus.OPTIONAL)
            delete_item(item_id=milk.id, user=user)
            clear_list(list_id=group_list.id, user=user)

        assert [d.event for d in outbox] == ['list_item_updated', 'list_item_deleted', 'list_cleared']
        assert outbox[0].payload['item']['status'] == ItemStatus.OPTIONAL
        assert outbox[1].payload['deletedBy']['id'] == str(user.id)
        assert outbox[2].payload['listId'] == str(group_list.id)

    def test_personal_list_is_silent(self, personal_list, user, outbox, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            add_item(list_id=personal_list.id, user=user, name='Milk')

        assert outbox == []

    def test_failed_mutation_is_not_announced(self, group_list, user, outbox, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(InvalidItemError):
                add_item(list_id=group_list.id, user=user, name='Milk', quantity=0)

        assert callbacks == []
        assert outbox == []
