"""Ledger recording service - append entries and move cached balances with them."""

import logging

from django.db import transaction
from django.db.models import F

from apps.accounts.models import MAX_POINTS_BALANCE, User
from apps.books.exceptions import InsufficientBalanceError, ValidationError
from apps.ledger.models import LedgerEntry, LedgerEntryKind, LedgerEntryStatus

logger = logging.getLogger(__name__)


def _validate_amount(amount: int) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool) or amount < 1:
        raise ValidationError("Ledger amount must be a positive whole number of points")


@transaction.atomic
def record_award(*, user: User, book, amount: int, description: str) -> LedgerEntry:
    """
    Credit points to a user and append the matching award entry.

    The balance increment is an ``F()`` expression, so concurrent awards to
    the same user never lose an update.

    Args:
        user: User receiving the points
        book: Book the award is for
        amount: Points to credit (>= 1)
        description: Human-readable reason shown in the history

    Returns:
        Created LedgerEntry

    Raises:
        ValidationError: If amount is not a positive integer, or the
            credit would take the balance past MAX_POINTS_BALANCE
    """
    _validate_amount(amount)

    updated = User.objects.filter(
        id=user.id,
        points_balance__lte=MAX_POINTS_BALANCE - amount,
    ).update(points_balance=F('points_balance') + amount)

    if updated == 0:
        raise ValidationError("This award would exceed the maximum points balance")

    entry = LedgerEntry.objects.create(
        user=user,
        book=book,
        kind=LedgerEntryKind.AWARD,
        amount=amount,
        status=LedgerEntryStatus.COMPLETED,
        description=description,
    )

    logger.info("Awarded %s points to user %s for book %s", amount, user.id, book.id)
    return entry


@transaction.atomic
def record_debit(*, user: User, book, amount: int, description: str) -> LedgerEntry:
    """
    Debit points from a user and append the matching debit entry.

    The decrement is conditional on the balance covering the amount, so two
    concurrent debits can never push a balance below zero: the second one
    matches no row and fails.

    Args:
        user: User paying the points
        book: Book being paid for
        amount: Points to debit (>= 1)
        description: Human-readable reason shown in the history

    Returns:
        Created LedgerEntry

    Raises:
        ValidationError: If amount is not a positive integer
        InsufficientBalanceError: If the user's balance is below amount
    """
    _validate_amount(amount)

    updated = User.objects.filter(
        id=user.id,
        points_balance__gte=amount,
    ).update(points_balance=F('points_balance') - amount)

    if updated == 0:
        raise InsufficientBalanceError(
            f"Insufficient reward points. This book costs {amount} points."
        )

    entry = LedgerEntry.objects.create(
        user=user,
        book=book,
        kind=LedgerEntryKind.DEBIT,
        amount=amount,
        status=LedgerEntryStatus.COMPLETED,
        description=description,
    )

    logger.info("Debited %s points from user %s for book %s", amount, user.id, book.id)
    return entry
