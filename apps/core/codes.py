"""
Short human-shareable codes for users and groups.

Codes are uppercase alphanumeric strings: 7 characters for users, 6 for
groups. Uniqueness is enforced by the database; callers insert through
``create_with_unique_code`` which retries on a collision.
"""

import logging
import secrets
import string
from typing import Callable, Optional, TypeVar

from django.conf import settings
from django.db import IntegrityError, transaction

from .exceptions import CodeGenerationError

logger = logging.getLogger(__name__)

T = TypeVar('T')

CODE_ALPHABET = string.ascii_uppercase + string.digits

USER_CODE = 'user'
GROUP_CODE = 'group'

CODE_LENGTHS = {
    USER_CODE: 7,
    GROUP_CODE: 6,
}


def generate_code(kind: str) -> str:
    """Generate a random code for ``kind`` ('user' or 'group')."""
    try:
        length = CODE_LENGTHS[kind]
    except KeyError:
        raise ValueError(f"Unknown code kind: {kind}")
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def create_with_unique_code(
    create: Callable[[str], T],
    *,
    kind: str,
    field: str,
    max_retries: Optional[int] = None
) -> T:
    """
    Run ``create(code)`` with freshly generated codes until it succeeds.

    Each attempt runs in its own savepoint so a collision does not poison
    an enclosing transaction. Only integrity errors mentioning ``field``
    are treated as collisions; any other constraint failure propagates.

    Raises:
        CodeGenerationError: If every attempt collided
    """
    attempts = max_retries or settings.CODE_GENERATION_MAX_RETRIES

    for attempt in range(attempts):
        code = generate_code(kind)
        try:
            with transaction.atomic():
                return create(code)
        except IntegrityError as e:
            if field not in str(e):
                raise
            logger.warning(
                "%s code collision on attempt %d/%d", kind, attempt + 1, attempts
            )

    raise CodeGenerationError(
        f"Failed to generate unique {kind} code after {attempts} attempts"
    )
