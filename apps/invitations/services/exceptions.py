"""Domain-specific exceptions for invitations services."""

from apps.core.exceptions import (
    BadRequestError,
    ConflictError,
    ExpiredError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)


class InvitationNotFoundError(NotFoundError):
    """Raised when an invitation does not exist."""
    default_message = 'Invitation not found'


class UserCodeNotFoundError(NotFoundError):
    """Raised when no user has the given user code."""
    default_message = 'No user found with that code'


class GroupCodeNotFoundError(NotFoundError):
    """Raised when no group has the given group code."""
    default_message = 'No group found with that code'


class SelfInvitationError(BadRequestError):
    """Raised when a user targets themselves."""
    default_message = 'You cannot invite yourself'


class InvalidInvitationError(BadRequestError):
    """Raised when invitation input is incomplete (e.g. missing group name)."""
    default_message = 'Invalid invitation'


class DuplicateInvitationError(ConflictError):
    """Raised when an identical pending invitation already exists."""
    default_message = 'An identical invitation is already pending'


class NotInvitationRecipientError(ForbiddenError):
    """Raised when someone other than the recipient accepts or declines."""
    default_message = 'Only the recipient can respond to this invitation'


class NotInvitationSenderError(ForbiddenError):
    """Raised when someone other than the sender cancels."""
    default_message = 'Only the sender can cancel this invitation'


class NotInvitationParticipantError(ForbiddenError):
    """Raised when a user who neither sent nor received an invitation reads it."""
    default_message = 'You do not have access to this invitation'


class InvitationNotPendingError(InvalidStateError):
    """Raised when transitioning an invitation that is no longer pending."""
    default_message = 'Invitation is no longer pending'


class InvitationExpiredError(ExpiredError):
    """Raised when transitioning an invitation past its expiry time."""
    default_message = 'Invitation has expired'
