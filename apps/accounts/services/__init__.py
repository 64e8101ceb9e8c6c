"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    DuplicateUsernameError,
    AccessDeniedError,
)
from .user_authentication import authenticate_user, issue_tokens
from .user_management import list_users, create_user, update_user, delete_user

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'DuplicateUsernameError',
    'AccessDeniedError',
    # Services
    'authenticate_user',
    'issue_tokens',
    'list_users',
    'create_user',
    'update_user',
    'delete_user',
]
