"""
Domain-specific exceptions for groups app.

Each exception subclasses an error kind from ``apps.core.exceptions`` and is
rendered by the API exception handler with the matching status code.
"""

from apps.core.exceptions import ConflictError, ForbiddenError, NotFoundError


class GroupNotFoundError(NotFoundError):
    """Raised when a group does not exist."""
    default_message = 'Group not found'


class NotMemberError(ForbiddenError):
    """Raised when a user tries to perform an action requiring membership."""
    default_message = 'You are not a member of this group'


class AlreadyMemberError(ConflictError):
    """Raised when a user is added to a group they're already in."""
    default_message = 'User is already a member of this group'
