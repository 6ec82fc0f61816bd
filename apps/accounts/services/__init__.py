"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    AuthenticationError,
    AuthorizationError,
    UserNotFoundError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .access import AccessContext, issue_tokens, authenticate_credential, authorize
from .user_queries import get_user_by_id, list_users

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'AuthenticationError',
    'AuthorizationError',
    'UserNotFoundError',
    # Services
    'register_user',
    'authenticate_user',
    'AccessContext',
    'issue_tokens',
    'authenticate_credential',
    'authorize',
    'get_user_by_id',
    'list_users',
]
