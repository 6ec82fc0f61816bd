from django.db import models
from django.db.models import IntegerField, Sum, Q
from django.db.models.functions import Coalesce
import uuid


class LedgerEntryKind(models.TextChoices):
    AWARD = 'award', 'Award'
    DEBIT = 'debit', 'Debit'


class LedgerEntryStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    COMPLETED = 'completed', 'Completed'
    FAILED = 'failed', 'Failed'


class LedgerEntryImmutableError(Exception):
    """Raised when code tries to change or delete a recorded entry."""
    pass


class LedgerEntryQuerySet(models.QuerySet):

    def completed(self):
        return self.filter(status=LedgerEntryStatus.COMPLETED)

    def totals(self):
        """Sums of completed awards and completed debits."""
        return self.completed().aggregate(
            awarded=Coalesce(
                Sum('amount', filter=Q(kind=LedgerEntryKind.AWARD)), 0,
                output_field=IntegerField(),
            ),
            debited=Coalesce(
                Sum('amount', filter=Q(kind=LedgerEntryKind.DEBIT)), 0,
                output_field=IntegerField(),
            ),
        )

    def balance(self):
        """Completed awards minus completed debits for the entries in this queryset."""
        totals = self.totals()
        return totals['awarded'] - totals['debited']

    def update(self, **kwargs):
        raise LedgerEntryImmutableError("Ledger entries cannot be modified")

    def delete(self):
        raise LedgerEntryImmutableError("Ledger entries cannot be deleted")


class LedgerEntry(models.Model):
    """
    Append-only record of a point-affecting event.

    The ledger is the source of truth for balances; ``User.points_balance``
    is a cached projection kept in step by ``apps.ledger.services``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='ledger_entries'
    )
    book = models.ForeignKey(
        'books.Book',
        on_delete=models.PROTECT,
        related_name='ledger_entries'
    )
    kind = models.CharField(max_length=10, choices=LedgerEntryKind.choices)
    amount = models.PositiveIntegerField()
    status = models.CharField(
        max_length=10,
        choices=LedgerEntryStatus.choices,
        default=LedgerEntryStatus.PENDING,
    )
    description = models.CharField(max_length=500)

    created_at = models.DateTimeField(auto_now_add=True)

    objects = LedgerEntryQuerySet.as_manager()

    class Meta:
        db_table = 'ledger_entries'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='ledger_user_created_idx'),
            models.Index(fields=['book'], name='ledger_book_idx'),
            models.Index(fields=['kind', 'status'], name='ledger_kind_status_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=1),
                name='ledger_amount_positive',
            ),
        ]
        ordering = ['-created_at']
        verbose_name_plural = 'ledger entries'

    def __str__(self):
        sign = '+' if self.kind == LedgerEntryKind.AWARD else '-'
        return f"{sign}{self.amount} pts for {self.user} ({self.status})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise LedgerEntryImmutableError("Ledger entries cannot be modified")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise LedgerEntryImmutableError("Ledger entries cannot be deleted")
