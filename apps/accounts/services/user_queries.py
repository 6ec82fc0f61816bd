"""Read-only user lookups."""

from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db.models import QuerySet

from .exceptions import UserNotFoundError

User = get_user_model()


def get_user_by_id(*, user_id: UUID) -> User:
    """
    Retrieve an active user by ID.

    Raises:
        UserNotFoundError: If the user doesn't exist or is deactivated
    """
    try:
        return User.objects.get(id=user_id, is_active=True)
    except (User.DoesNotExist, ValueError):
        raise UserNotFoundError("User not found")


def list_users(*, role: Optional[str] = None) -> QuerySet:
    """Active users, newest first, optionally limited to one role."""
    queryset = User.objects.filter(is_active=True)
    if role:
        queryset = queryset.filter(role=role)
    return queryset.order_by('-created_at')
