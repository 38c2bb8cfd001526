"""User authentication service."""

from django.contrib.auth import authenticate, get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError

User = get_user_model()


def authenticate_user(*, email: str, password: str, request=None) -> User:
    """
    Check credentials and record the login time.

    Raises:
        InvalidCredentialsError: If the credentials are wrong or the account is inactive
    """
    user = authenticate(request, username=email, password=password)
    if user is None:
        raise InvalidCredentialsError()

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user
