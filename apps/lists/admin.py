# ==========================================
# apps/lists/admin.py
# ==========================================

from django.contrib import admin
from apps.lists.models import ShoppingList, Item


class ItemInline(admin.TabularInline):
    """Inline admin for list items."""
    model = Item
    extra = 0
    fields = ['name', 'quantity', 'price', 'status', 'added_by', 'created_at']
    readonly_fields = ['created_at']


@admin.register(ShoppingList)
class ShoppingListAdmin(admin.ModelAdmin):
    """Admin interface for shopping lists. Totals are maintained by the ledger."""

    list_display = ['id', 'owner_user', 'owner_group', 'expected_total', 'actual_total', 'updated_at']
    search_fields = ['owner_user__email', 'owner_group__name', 'owner_group__group_code']
    readonly_fields = ['expected_total', 'actual_total', 'created_at', 'updated_at']
    inlines = [ItemInline]

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('owner_user', 'owner_group')


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    """Admin interface for items."""

    list_display = ['name', 'quantity', 'price', 'status', 'shopping_list', 'added_by', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
