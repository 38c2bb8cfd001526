"""Domain-specific exceptions for accounts services."""

from apps.core.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when signing up with an email that already has an account."""
    default_message = 'An account with this email already exists'


class InvalidCredentialsError(UnauthorizedError):
    """Raised when authentication credentials are invalid."""
    default_message = 'Invalid credentials'


class UserNotFoundError(NotFoundError):
    """Raised when user does not exist."""
    default_message = 'User not found'


class NotAccountOwnerError(ForbiddenError):
    """Raised when a user acts on another user's account or personal list."""
    default_message = 'You can only access your own account'
