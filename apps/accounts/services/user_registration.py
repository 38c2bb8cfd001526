"""User registration service."""

import logging

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from .exceptions import EmailAlreadyRegisteredError

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str = ""
) -> User:
    """
    Register a new user together with their personal list.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        first_name: First name
        last_name: Optional last name

    Returns:
        Created User instance

    Raises:
        EmailAlreadyRegisteredError: If the email is already taken
        CodeGenerationError: If no unique user code could be generated
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegisteredError()

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
    except IntegrityError:
        # Concurrent signup with the same email
        raise EmailAlreadyRegisteredError()

    logger.info("Registered user %s (%s)", user.id, user.user_code)
    return user
