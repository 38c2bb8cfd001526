"""
Lists app services layer.

Item mutations and the totals ledger. Every state-changing operation runs
in one transaction with the owning list row locked.
"""

from .exceptions import (
    ListNotFoundError,
    ItemNotFoundError,
    ListAccessDeniedError,
    EmptyItemUpdateError,
    InvalidItemError,
)

from .ledger import (
    Totals,
    compute_totals,
    recompute_list_totals,
)

from .access import (
    can_access_list,
    authorize_list_access,
)

from .item_management import (
    DeletedItem,
    get_item,
    get_list_with_items,
    add_item,
    update_item_details,
    update_item_status,
    delete_item,
    clear_list,
)

from .snapshots import (
    item_snapshot,
    user_snippet,
)


__all__ = [
    # Exceptions
    'ListNotFoundError',
    'ItemNotFoundError',
    'ListAccessDeniedError',
    'EmptyItemUpdateError',
    'InvalidItemError',

    # Ledger
    'Totals',
    'compute_totals',
    'recompute_list_totals',

    # Access
    'can_access_list',
    'authorize_list_access',

    # Item Management
    'DeletedItem',
    'get_item',
    'get_list_with_items',
    'add_item',
    'update_item_details',
    'update_item_status',
    'delete_item',
    'clear_list',

    # Snapshots
    'item_snapshot',
    'user_snippet',
]
