"""Services for accounts business logic."""

from .exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UserNotFoundError,
    NotAccountOwnerError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .account_management import (
    ensure_account_owner,
    get_user_profile,
    get_user_groups,
    update_user_profile,
    delete_user_account,
)
from .personal_list import (
    get_personal_list,
    add_personal_item,
    clear_personal_list,
)

__all__ = [
    # Exceptions
    'EmailAlreadyRegisteredError',
    'InvalidCredentialsError',
    'UserNotFoundError',
    'NotAccountOwnerError',
    # Services
    'register_user',
    'authenticate_user',
    'ensure_account_owner',
    'get_user_profile',
    'get_user_groups',
    'update_user_profile',
    'delete_user_account',
    'get_personal_list',
    'add_personal_item',
    'clear_personal_list',
]
