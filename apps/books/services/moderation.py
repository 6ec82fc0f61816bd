"""Book moderation service - reviewers approve or reject pending donations."""

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.accounts.services import authorize
from apps.books.exceptions import InvalidStateError, ValidationError
from apps.books.models import Book, BookStatus, ReviewDecision
from apps.ledger.services import record_award
from apps.notifications.models import NotificationCategory
from apps.notifications.services import notify_user
from .book_queries import fetch_book
from .pricing import compute_award

logger = logging.getLogger(__name__)


@transaction.atomic
def review_book(*, reviewer: User, book_id: UUID, decision: str) -> Book:
    """
    Approve or reject a pending book.

    The status change is a conditional update on ``status='pending'``, so
    when two reviewers act on the same book only one update matches a row.
    The other caller gets ``InvalidStateError``.

    On approval the donor is credited ``floor(reference_price * AWARD_RATE)``
    points through the ledger. Rejection leaves balances and the ledger
    untouched.

    Args:
        reviewer: Reviewer making the decision
        book_id: UUID of the pending book
        decision: 'approve' or 'reject'

    Returns:
        Updated Book instance

    Raises:
        ValidationError: If decision is not approve/reject
        AuthenticationError: If reviewer is anonymous or inactive
        AuthorizationError: If the user is not a reviewer
        BookNotFoundError: If the book doesn't exist
        InvalidStateError: If the book is no longer pending
    """
    if decision not in ReviewDecision.values:
        raise ValidationError("Decision must be 'approve' or 'reject'")

    authorize(user=reviewer, roles=(UserRole.REVIEWER,))

    book = fetch_book(book_id)

    if book.status != BookStatus.PENDING:
        raise InvalidStateError(f"Book has already been {book.status}")

    new_status = (
        BookStatus.APPROVED if decision == ReviewDecision.APPROVE else BookStatus.REJECTED
    )
    now = timezone.now()

    updated = Book.objects.filter(id=book.id, status=BookStatus.PENDING).update(
        status=new_status,
        reviewer=reviewer,
        reviewed_at=now,
        updated_at=now,
    )
    if updated == 0:
        raise InvalidStateError("Book has already been reviewed")

    book.refresh_from_db()

    if new_status == BookStatus.APPROVED:
        award = compute_award(book.reference_price)
        if award > 0:
            record_award(
                user=book.donor,
                book=book,
                amount=award,
                description=f'Donation approved: "{book.title}"',
            )
        notify_user(
            recipient=book.donor,
            category=NotificationCategory.ITEM_APPROVED,
            title='Book Approved!',
            message=(
                f'Your book "{book.title}" has been approved! '
                f'You earned {award} reward points.'
            ),
            book=book,
        )
    else:
        notify_user(
            recipient=book.donor,
            category=NotificationCategory.ITEM_REJECTED,
            title='Book Rejected',
            message=(
                f'Your book "{book.title}" was not approved for listing. '
                f'Please check the quality guidelines and try again.'
            ),
            book=book,
        )

    logger.info("Book %s %s by reviewer %s", book.id, new_status, reviewer.id)
    return book
