"""Plain-dict snapshots of users and items for event payloads and responses."""

from typing import Optional

from apps.accounts.models import User
from apps.lists.models import Item


def user_snippet(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None
    return {
        'id': str(user.id),
        'first_name': user.first_name,
        'last_name': user.last_name,
        'user_code': user.user_code,
        'profile_pic': user.profile_pic or None,
    }


def item_snapshot(item: Item) -> dict:
    return {
        'id': str(item.id),
        'list_id': str(item.shopping_list_id),
        'name': item.name,
        'quantity': item.quantity,
        'price': str(item.price) if item.price is not None else None,
        'status': item.status,
        'added_by_id': str(item.added_by_id) if item.added_by_id else None,
        'created_at': item.created_at.isoformat() if item.created_at else None,
        'updated_at': item.updated_at.isoformat() if item.updated_at else None,
    }
