"""Book redemption service - spend reward points on approved books."""

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.accounts.services import authorize
from apps.books.exceptions import (
    ConflictError,
    InsufficientBalanceError,
    InvalidStateError,
    NotFoundError,
    SelfRedemptionError,
)
from apps.books.models import Book, BookStatus
from apps.ledger.services import record_debit
from apps.notifications.models import NotificationCategory
from apps.notifications.services import notify_user
from .book_queries import fetch_book

logger = logging.getLogger(__name__)


@transaction.atomic
def redeem_book(*, redeemer: User, book_id: UUID) -> Book:
    """
    Redeem an approved book for its redemption price.

    The status change, the balance debit and the debit ledger entry are
    written in one transaction; any failure rolls all three back.

    Both writes are conditional: the book must still be approved and the
    redeemer's balance must still cover the price when the UPDATE runs,
    so concurrent redemptions can neither sell a book twice nor overdraw
    a balance.

    Args:
        redeemer: User spending the points
        book_id: UUID of the approved book

    Returns:
        Updated Book instance

    Raises:
        AuthenticationError: If redeemer is anonymous or inactive
        NotFoundError: If the redeemer account no longer exists
        BookNotFoundError: If the book doesn't exist
        InvalidStateError: If the book is not approved
        SelfRedemptionError: If the redeemer donated the book
        InsufficientBalanceError: If the balance is below the price
        ConflictError: If another redemption took the book first
    """
    authorize(user=redeemer, roles=UserRole.values)

    try:
        redeemer.refresh_from_db(fields=['points_balance'])
    except User.DoesNotExist:
        raise NotFoundError("User not found.")

    book = fetch_book(book_id)

    if book.status != BookStatus.APPROVED:
        raise InvalidStateError(
            f"Only approved books can be redeemed. This book is {book.status}."
        )

    if book.donor_id == redeemer.id:
        raise SelfRedemptionError()

    price = book.redemption_price
    if redeemer.points_balance < price:
        raise InsufficientBalanceError(
            f"Insufficient reward points. This book costs {price} points, "
            f"you have {redeemer.points_balance}."
        )

    now = timezone.now()
    updated = Book.objects.filter(id=book.id, status=BookStatus.APPROVED).update(
        status=BookStatus.REDEEMED,
        redeemer=redeemer,
        redeemed_at=now,
        updated_at=now,
    )
    if updated == 0:
        raise ConflictError("This book has just been redeemed by someone else.")

    if price > 0:
        record_debit(
            user=redeemer,
            book=book,
            amount=price,
            description=f'Redeemed: "{book.title}"',
        )

    book.refresh_from_db()
    redeemer.refresh_from_db(fields=['points_balance'])

    notify_user(
        recipient=redeemer,
        category=NotificationCategory.ITEM_REDEEMED,
        title='Redemption Successful!',
        message=f'You successfully redeemed "{book.title}" for {price} points.',
        book=book,
    )

    logger.info("Book %s redeemed by %s for %s points", book.id, redeemer.id, price)
    return book
