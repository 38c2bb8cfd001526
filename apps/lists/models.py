# ==========================================
# apps/lists/models.py
# ==========================================

from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
import uuid


class ItemStatus(models.TextChoices):
    NEEDED = 'NEEDED', 'Needed'
    OPTIONAL = 'OPTIONAL', 'Optional'
    PURCHASED = 'PURCHASED', 'Purchased'


class ShoppingList(models.Model):
    """
    Grocery list owned by exactly one user or exactly one group.

    Totals are derived from the items and rewritten by the ledger on
    every item mutation; they are never edited directly.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='personal_list'
    )
    owner_group = models.OneToOneField(
        'groups.Group',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='shopping_list'
    )
    expected_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    actual_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'lists'
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(owner_user__isnull=False, owner_group__isnull=True)
                    | Q(owner_user__isnull=True, owner_group__isnull=False)
                ),
                name='list_has_exactly_one_owner',
            ),
        ]

    def __str__(self):
        owner = self.owner_group or self.owner_user
        return f"List of {owner}"

    @property
    def is_group_list(self):
        return self.owner_group_id is not None


class Item(models.Model):
    """Line on a shopping list."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shopping_list = models.ForeignKey(ShoppingList, on_delete=models.CASCADE, related_name='items')
    name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(max_length=20, choices=ItemStatus.choices, default=ItemStatus.NEEDED)
    added_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='added_items'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'items'
        indexes = [
            models.Index(fields=['shopping_list', 'status'], name='items_list_status_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.name} x{self.quantity}"
