"""Notification inbox service - listing and read state."""

from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.notifications.exceptions import NotificationNotFoundError
from apps.notifications.models import Notification


def get_user_notifications(*, user: User, unread_only: bool = False) -> QuerySet[Notification]:
    """Get a user's notifications, newest first."""
    queryset = Notification.objects.filter(user=user).select_related('book')
    if unread_only:
        queryset = queryset.filter(is_read=False)
    return queryset.order_by('-created_at')


def get_unread_count(*, user: User) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()


def mark_as_read(*, notification_id: UUID, user: User) -> Notification:
    """
    Mark one of the user's notifications as read.

    Raises:
        NotificationNotFoundError: If it does not exist or is not the user's
    """
    try:
        notification = Notification.objects.get(id=notification_id, user=user)
    except Notification.DoesNotExist:
        raise NotificationNotFoundError()

    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read'])

    return notification


def mark_all_as_read(*, user: User) -> int:
    """Mark every unread notification as read. Returns how many changed."""
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
