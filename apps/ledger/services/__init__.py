"""
Ledger services.

Every change to a user's point balance goes through ``record_award`` or
``record_debit``, which append an entry and move the cached balance in the
same transaction.
"""

from .ledger_recording import (
    record_award,
    record_debit,
)

from .ledger_queries import (
    get_user_entries,
    ledger_balance,
    get_balance_summary,
)

from .reconciliation import (
    BalanceMismatch,
    find_balance_mismatches,
    repair_balances,
)


__all__ = [
    # Recording
    'record_award',
    'record_debit',
    # Queries
    'get_user_entries',
    'ledger_balance',
    'get_balance_summary',
    # Reconciliation
    'BalanceMismatch',
    'find_balance_mismatches',
    'repair_balances',
]
