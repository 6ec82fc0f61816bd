"""Reconciliation service - compare cached balances against the ledger."""

import logging
from typing import NamedTuple
from uuid import UUID

from django.db import transaction
from django.db.models import IntegerField, Q, Sum
from django.db.models.functions import Coalesce

from apps.accounts.models import User
from apps.ledger.models import LedgerEntry, LedgerEntryKind, LedgerEntryStatus

logger = logging.getLogger(__name__)


class BalanceMismatch(NamedTuple):
    user_id: UUID
    email: str
    cached_balance: int
    ledger_balance: int

    @property
    def drift(self) -> int:
        return self.cached_balance - self.ledger_balance


def _users_with_ledger_balance():
    completed = Q(ledger_entries__status=LedgerEntryStatus.COMPLETED)
    return User.objects.annotate(
        awarded=Coalesce(
            Sum('ledger_entries__amount', filter=completed & Q(ledger_entries__kind=LedgerEntryKind.AWARD)),
            0,
            output_field=IntegerField(),
        ),
        debited=Coalesce(
            Sum('ledger_entries__amount', filter=completed & Q(ledger_entries__kind=LedgerEntryKind.DEBIT)),
            0,
            output_field=IntegerField(),
        ),
    )


def find_balance_mismatches() -> list[BalanceMismatch]:
    """
    List every user whose cached balance differs from their ledger balance.

    A healthy system returns an empty list.
    """
    mismatches = []
    for user in _users_with_ledger_balance().order_by('email'):
        derived = user.awarded - user.debited
        if derived != user.points_balance:
            mismatches.append(BalanceMismatch(
                user_id=user.id,
                email=user.email,
                cached_balance=user.points_balance,
                ledger_balance=derived,
            ))
    return mismatches


@transaction.atomic
def repair_balances(mismatches: list[BalanceMismatch]) -> int:
    """
    Reset cached balances to their ledger value.

    Each user row is locked and its ledger balance recomputed before the
    write, so an award or debit committed after ``find_balance_mismatches``
    ran is included rather than overwritten. Negative ledger balances are
    left alone and reported, since the cached balance cannot go below zero.

    Returns:
        Number of users repaired
    """
    repaired = 0
    for mismatch in mismatches:
        user = User.objects.select_for_update().filter(id=mismatch.user_id).first()
        if user is None:
            continue

        derived = LedgerEntry.objects.filter(user=user).balance()
        if derived < 0:
            logger.error(
                "Ledger balance for user %s is negative (%s); not repairing",
                user.id, derived,
            )
            continue
        if derived == user.points_balance:
            continue

        User.objects.filter(id=user.id).update(points_balance=derived)
        repaired += 1
        logger.warning(
            "Repaired balance for user %s: %s -> %s",
            user.id, user.points_balance, derived,
        )
    return repaired
