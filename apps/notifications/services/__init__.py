from .dispatch import (
    notify_user,
    notify_role,
)

from .notification_management import (
    get_user_notifications,
    get_unread_count,
    mark_as_read,
    mark_all_as_read,
)


__all__ = [
    # Dispatch
    'notify_user',
    'notify_role',
    # Inbox
    'get_user_notifications',
    'get_unread_count',
    'mark_as_read',
    'mark_all_as_read',
]
