"""Domain-specific exceptions for lists services."""

from apps.core.exceptions import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
)


class ListNotFoundError(NotFoundError):
    """Raised when a shopping list does not exist."""
    default_message = 'List not found'


class ItemNotFoundError(NotFoundError):
    """Raised when an item does not exist."""
    default_message = 'Item not found'


class ListAccessDeniedError(ForbiddenError):
    """Raised when a user is neither the list owner nor a member of the owning group."""
    default_message = 'You do not have access to this list'


class EmptyItemUpdateError(BadRequestError):
    """Raised when an item update carries no fields."""
    default_message = 'At least one field must be provided'


class InvalidItemError(BadRequestError):
    """Raised when item fields violate item rules (quantity, price, status)."""
    default_message = 'Invalid item'
