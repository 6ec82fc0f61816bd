"""Ledger read service - history and balance summaries."""

from typing import Optional

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.books.exceptions import ValidationError
from apps.ledger.models import LedgerEntry, LedgerEntryKind


def get_user_entries(*, user: User, kind: Optional[str] = None) -> QuerySet[LedgerEntry]:
    """
    Get a user's ledger history, newest first.

    Args:
        user: Owner of the entries
        kind: Optional filter ('award' or 'debit')

    Raises:
        ValidationError: If kind is not a known entry kind
    """
    queryset = LedgerEntry.objects.filter(user=user).select_related('book')

    if kind:
        if kind not in LedgerEntryKind.values:
            raise ValidationError(f"Unknown ledger entry kind: {kind}")
        queryset = queryset.filter(kind=kind)

    return queryset.order_by('-created_at')


def ledger_balance(*, user: User) -> int:
    """Balance derived from completed entries alone."""
    return LedgerEntry.objects.filter(user=user).balance()


def get_balance_summary(*, user: User) -> dict:
    """
    Cached balance next to the ledger-derived totals.

    Returns:
        dict with points_balance, total_awarded, total_debited,
        ledger_balance and in_sync
    """
    user.refresh_from_db(fields=['points_balance'])
    totals = LedgerEntry.objects.filter(user=user).totals()
    derived = totals['awarded'] - totals['debited']

    return {
        'points_balance': user.points_balance,
        'total_awarded': totals['awarded'],
        'total_debited': totals['debited'],
        'ledger_balance': derived,
        'in_sync': derived == user.points_balance,
    }
