"""
Domain exceptions for accounts services.

These back the access boundary: every workflow operation authenticates the
caller and resolves their role through ``apps.accounts.services.access``
before touching books, the ledger or notifications.
"""
from rest_framework.exceptions import APIException


class AccountsServiceError(APIException):
    """Base exception for accounts services."""
    status_code = 400
    default_detail = 'Account operation failed.'
    default_code = 'accounts_error'


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    default_detail = 'Registration failed.'
    default_code = 'registration_failed'


class AuthenticationError(AccountsServiceError):
    """Raised when a credential cannot be resolved to an active user."""
    status_code = 401
    default_detail = 'Authentication credentials are invalid or expired.'
    default_code = 'not_authenticated'


class AuthorizationError(AccountsServiceError):
    """Raised when the caller's role does not allow the operation."""
    status_code = 403
    default_detail = 'Your role does not allow this action.'
    default_code = 'not_authorized'


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    status_code = 404
    default_detail = 'User not found.'
    default_code = 'not_found'
