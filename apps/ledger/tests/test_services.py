from io import StringIO

import pytest
from django.core.management import call_command

from apps.accounts.models import MAX_POINTS_BALANCE, User
from apps.books.exceptions import InsufficientBalanceError, ValidationError
from apps.ledger.models import (
    LedgerEntry,
    LedgerEntryImmutableError,
    LedgerEntryKind,
    LedgerEntryStatus,
)
from apps.ledger.services import (
    find_balance_mismatches,
    get_balance_summary,
    get_user_entries,
    ledger_balance,
    record_award,
    record_debit,
    repair_balances,
)


def set_cached_balance(user, points):
    """Write points_balance directly, bypassing the ledger."""
    User.objects.filter(id=user.id).update(points_balance=points)


# =============================================================================
# Recording
# =============================================================================

@pytest.mark.django_db
class TestRecording:

    def test_award_credits_balance(self, contributor, book):
        entry = record_award(user=contributor, book=book, amount=200, description='Donation')

        contributor.refresh_from_db()
        assert contributor.points_balance == 200
        assert entry.kind == LedgerEntryKind.AWARD
        assert entry.status == LedgerEntryStatus.COMPLETED
        assert entry.amount == 200

    def test_debit_reduces_balance(self, contributor, book):
        record_award(user=contributor, book=book, amount=200, description='Donation')

        entry = record_debit(user=contributor, book=book, amount=150, description='Redeemed')

        contributor.refresh_from_db()
        assert contributor.points_balance == 50
        assert entry.kind == LedgerEntryKind.DEBIT
        assert ledger_balance(user=contributor) == 50

    def test_debit_cannot_overdraw(self, contributor, book):
        record_award(user=contributor, book=book, amount=100, description='Donation')

        with pytest.raises(InsufficientBalanceError):
            record_debit(user=contributor, book=book, amount=101, description='Redeemed')

        contributor.refresh_from_db()
        assert contributor.points_balance == 100
        assert LedgerEntry.objects.filter(kind=LedgerEntryKind.DEBIT).count() == 0

    def test_award_cannot_overflow_balance(self, contributor, book):
        set_cached_balance(contributor, MAX_POINTS_BALANCE - 10)

        with pytest.raises(ValidationError):
            record_award(user=contributor, book=book, amount=11, description='Too much')

        contributor.refresh_from_db()
        assert contributor.points_balance == MAX_POINTS_BALANCE - 10
        assert not LedgerEntry.objects.exists()

        record_award(user=contributor, book=book, amount=10, description='Exactly full')
        contributor.refresh_from_db()
        assert contributor.points_balance == MAX_POINTS_BALANCE

    @pytest.mark.parametrize('amount', [0, -10, 2.5, True])
    def test_amount_must_be_positive_integer(self, contributor, book, amount):
        with pytest.raises(ValidationError):
            record_award(user=contributor, book=book, amount=amount, description='Bad')
        with pytest.raises(ValidationError):
            record_debit(user=contributor, book=book, amount=amount, description='Bad')

        assert not LedgerEntry.objects.exists()


# =============================================================================
# Immutability
# =============================================================================

@pytest.mark.django_db
class TestImmutability:

    @pytest.fixture
    def entry(self, contributor, book):
        return record_award(user=contributor, book=book, amount=10, description='Donation')

    def test_entry_cannot_be_saved_again(self, entry):
        entry.amount = 1000
        with pytest.raises(LedgerEntryImmutableError):
            entry.save()

    def test_entry_cannot_be_deleted(self, entry):
        with pytest.raises(LedgerEntryImmutableError):
            entry.delete()
        assert LedgerEntry.objects.filter(id=entry.id).exists()

    def test_queryset_update_refused(self, entry):
        with pytest.raises(LedgerEntryImmutableError):
            LedgerEntry.objects.filter(id=entry.id).update(amount=1000)

    def test_queryset_delete_refused(self, entry):
        with pytest.raises(LedgerEntryImmutableError):
            LedgerEntry.objects.all().delete()


# =============================================================================
# Queries
# =============================================================================

@pytest.mark.django_db
class TestQueries:

    def test_entries_newest_first_and_filtered(self, contributor, other_contributor, book):
        record_award(user=contributor, book=book, amount=300, description='First')
        record_debit(user=contributor, book=book, amount=100, description='Second')
        record_award(user=other_contributor, book=book, amount=5, description='Not mine')

        entries = list(get_user_entries(user=contributor))
        assert [e.description for e in entries] == ['Second', 'First']

        debits = get_user_entries(user=contributor, kind=LedgerEntryKind.DEBIT)
        assert [e.amount for e in debits] == [100]

    def test_unknown_kind(self, contributor):
        with pytest.raises(ValidationError):
            get_user_entries(user=contributor, kind='refund')

    def test_balance_summary(self, contributor, book):
        record_award(user=contributor, book=book, amount=300, description='Donation')
        record_debit(user=contributor, book=book, amount=120, description='Redeemed')

        summary = get_balance_summary(user=contributor)

        assert summary == {
            'points_balance': 180,
            'total_awarded': 300,
            'total_debited': 120,
            'ledger_balance': 180,
            'in_sync': True,
        }

    def test_empty_ledger(self, contributor):
        assert ledger_balance(user=contributor) == 0
        assert get_balance_summary(user=contributor)['in_sync'] is True


# =============================================================================
# Reconciliation
# =============================================================================

@pytest.mark.django_db
class TestReconciliation:

    def test_no_mismatches_when_consistent(self, contributor, book):
        record_award(user=contributor, book=book, amount=300, description='Donation')

        assert find_balance_mismatches() == []

    def test_drift_detected_and_repaired(self, contributor, other_contributor, book):
        record_award(user=contributor, book=book, amount=300, description='Donation')
        set_cached_balance(contributor, 350)
        set_cached_balance(other_contributor, 7)

        mismatches = find_balance_mismatches()

        assert [(m.email, m.cached_balance, m.ledger_balance, m.drift) for m in mismatches] == [
            (contributor.email, 350, 300, 50),
            (other_contributor.email, 7, 0, 7),
        ]

        assert repair_balances(mismatches) == 2
        assert find_balance_mismatches() == []
        contributor.refresh_from_db()
        assert contributor.points_balance == 300

    def test_repair_includes_entries_recorded_after_detection(self, contributor, book):
        record_award(user=contributor, book=book, amount=300, description='Donation')
        set_cached_balance(contributor, 350)
        mismatches = find_balance_mismatches()

        record_award(user=contributor, book=book, amount=100, description='Late award')

        assert repair_balances(mismatches) == 1
        contributor.refresh_from_db()
        assert contributor.points_balance == 400
        assert find_balance_mismatches() == []

    def test_repair_skips_users_already_back_in_sync(self, contributor, book):
        record_award(user=contributor, book=book, amount=300, description='Donation')
        set_cached_balance(contributor, 350)
        mismatches = find_balance_mismatches()
        set_cached_balance(contributor, 300)

        assert repair_balances(mismatches) == 0


@pytest.mark.django_db
class TestVerifyLedgerCommand:
    """Tests for manage.py verify_ledger"""

    def test_reports_clean_ledger(self, contributor, book):
        record_award(user=contributor, book=book, amount=300, description='Donation')
        out = StringIO()

        call_command('verify_ledger', stdout=out)

        assert 'All balances match the ledger.' in out.getvalue()

    def test_reports_without_fixing(self, contributor, book):
        record_award(user=contributor, book=book, amount=300, description='Donation')
        set_cached_balance(contributor, 999)
        out = StringIO()

        call_command('verify_ledger', stdout=out)

        output = out.getvalue()
        assert 'Found 1 balance mismatch(es)' in output
        assert 'drift: +699' in output
        assert '--fix' in output
        contributor.refresh_from_db()
        assert contributor.points_balance == 999

    def test_fix_repairs_balances(self, contributor, book):
        record_award(user=contributor, book=book, amount=300, description='Donation')
        set_cached_balance(contributor, 0)
        out = StringIO()

        call_command('verify_ledger', '--fix', stdout=out)

        assert 'Repaired 1 balance(s).' in out.getvalue()
        contributor.refresh_from_db()
        assert contributor.points_balance == 300
