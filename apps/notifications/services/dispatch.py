"""
Notification dispatch service.

Notifications are side effects of workflow transitions. They are queued with
``transaction.on_commit`` so they are only stored once the transition that
caused them has committed, and a failure while storing them is logged and
never reaches the caller.
"""

import logging
from functools import partial
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError

from apps.accounts.models import User
from apps.notifications.models import Notification, NotificationCategory

logger = logging.getLogger(__name__)


def _deliver(*, recipient_ids: list[UUID], category: str, title: str,
             message: str, book_id: Optional[UUID]) -> int:
    try:
        created = Notification.objects.bulk_create([
            Notification(
                user_id=recipient_id,
                category=category,
                title=title,
                message=message,
                book_id=book_id,
            )
            for recipient_id in recipient_ids
        ])
    except DatabaseError:
        logger.exception(
            "Failed to store '%s' notification for %s recipient(s)",
            category, len(recipient_ids),
        )
        return 0

    logger.debug("Stored '%s' notification for %s recipient(s)", category, len(created))
    return len(created)


def notify_user(
    *,
    recipient: User,
    category: str,
    title: str,
    message: str,
    book=None
) -> None:
    """
    Queue a notification for one user.

    Runs after the surrounding transaction commits, or immediately when
    there is none.
    """
    transaction.on_commit(
        partial(
            _deliver,
            recipient_ids=[recipient.id],
            category=category,
            title=title,
            message=message,
            book_id=book.id if book else None,
        ),
        robust=True,
    )


def _deliver_to_role(*, role: str, category: str, title: str,
                     message: str, book_id: Optional[UUID]) -> int:
    try:
        recipient_ids = list(
            User.objects.filter(role=role, is_active=True).values_list('id', flat=True)
        )
    except DatabaseError:
        logger.exception("Failed to look up '%s' recipients for notification", role)
        return 0

    if not recipient_ids:
        return 0

    return _deliver(
        recipient_ids=recipient_ids,
        category=category,
        title=title,
        message=message,
        book_id=book_id,
    )


def notify_role(
    *,
    role: str,
    category: str = NotificationCategory.INFO,
    title: str,
    message: str,
    book=None
) -> None:
    """Queue a notification for every active user holding ``role``."""
    transaction.on_commit(
        partial(
            _deliver_to_role,
            role=role,
            category=category,
            title=title,
            message=message,
            book_id=book.id if book else None,
        ),
        robust=True,
    )
