"""
Access boundary: bearer credentials in, ``(user_id, role)`` out.

The HTTP layer authenticates through simplejwt's ``JWTAuthentication``;
these helpers expose the same contract to services, management commands
and tests without going through a request object.
"""

from typing import NamedTuple
from uuid import UUID

from django.contrib.auth import get_user_model
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from .exceptions import AuthenticationError, AuthorizationError

User = get_user_model()


class AccessContext(NamedTuple):
    user_id: UUID
    role: str


def issue_tokens(user: User) -> dict:
    """
    Issue a refresh/access token pair for ``user``.

    The role is embedded as a claim for clients; the server always re-reads
    it from the database when authorizing.
    """
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    access = refresh.access_token
    access['role'] = user.role
    return {
        'refresh': str(refresh),
        'access': str(access),
    }


def authenticate_credential(*, token: str) -> AccessContext:
    """
    Resolve a bearer access token to the caller's identity and role.

    Raises:
        AuthenticationError: If the token is malformed, expired, or belongs
            to a missing or deactivated user
    """
    if not token:
        raise AuthenticationError("No token provided")

    try:
        validated = AccessToken(token)
    except TokenError:
        raise AuthenticationError("Invalid token")

    user_id = validated.get(api_settings.USER_ID_CLAIM)
    try:
        user = User.objects.only('id', 'role', 'is_active').get(id=user_id)
    except (User.DoesNotExist, ValueError):
        raise AuthenticationError("Invalid token")

    if not user.is_active:
        raise AuthenticationError("Account is deactivated")

    return AccessContext(user_id=user.id, role=user.role)


def authorize(*, user: User, roles) -> None:
    """
    Ensure ``user`` holds one of ``roles``.

    Raises:
        AuthenticationError: If ``user`` is anonymous or inactive
        AuthorizationError: If the user's role is not in ``roles``
    """
    if user is None or not user.is_authenticated or not user.is_active:
        raise AuthenticationError("Authentication required")

    if not user.has_role(*roles):
        raise AuthorizationError(
            f"This action requires one of the roles: {', '.join(str(r) for r in roles)}"
        )
