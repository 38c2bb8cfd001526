"""
Error kinds shared by every service layer.

Each kind carries the HTTP status it maps to. App-specific exceptions in
``apps/<app>/services/exceptions.py`` subclass one of these kinds, so services
raise precise domain errors while the API boundary only needs to know the kind.
"""


class ServiceError(Exception):
    """Base exception for all service errors."""

    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ServiceError):
    """Request is malformed or violates a business rule."""
    status_code = 400
    default_message = 'Bad request'


class UnauthorizedError(ServiceError):
    """Caller is not authenticated."""
    status_code = 401
    default_message = 'Authentication required'


class ForbiddenError(ServiceError):
    """Caller is authenticated but not allowed to act on the resource."""
    status_code = 403
    default_message = 'You do not have permission to perform this action'


class NotFoundError(ServiceError):
    """Resource does not exist."""
    status_code = 404
    default_message = 'Not found'


class ConflictError(ServiceError):
    """Operation clashes with the current state (duplicates, existing membership)."""
    status_code = 409
    default_message = 'Conflict'


class InvalidStateError(ServiceError):
    """Transition attempted from a state that does not allow it."""
    status_code = 400
    default_message = 'Invalid state transition'


class ExpiredError(ServiceError):
    """Resource has passed its expiry time."""
    status_code = 400
    default_message = 'Resource has expired'


class InternalError(ServiceError):
    """Unexpected failure; message is safe to show to clients."""
    status_code = 500
    default_message = 'Internal server error'


class CodeGenerationError(InternalError):
    """Raised when no unique code could be generated within the retry budget."""
    default_message = 'Failed to generate a unique code'
