"""
Management command to check cached point balances against the ledger.

Each user's ``points_balance`` must equal completed awards minus completed
debits. This command lists any users where that does not hold and, with
``--fix``, resets the cached balance to the ledger value.

Usage:
    python manage.py verify_ledger
    python manage.py verify_ledger --fix
"""

from django.core.management.base import BaseCommand
from apps.ledger.services import find_balance_mismatches, repair_balances


class Command(BaseCommand):
    help = 'Verify that cached point balances match the ledger'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Reset mismatched balances to the ledger value',
        )

    def handle(self, *args, **options):
        mismatches = find_balance_mismatches()

        if not mismatches:
            self.stdout.write(
                self.style.SUCCESS('All balances match the ledger.')
            )
            return

        self.stdout.write(f'\nFound {len(mismatches)} balance mismatch(es):\n')

        for mismatch in mismatches:
            self.stdout.write(
                f'  - {mismatch.email} | cached: {mismatch.cached_balance} '
                f'| ledger: {mismatch.ledger_balance} | drift: {mismatch.drift:+d}'
            )

        if not options['fix']:
            self.stdout.write(
                self.style.WARNING('\nRun with --fix to repair these balances.')
            )
            return

        repaired = repair_balances(mismatches)

        self.stdout.write(
            self.style.SUCCESS(f'\nRepaired {repaired} balance(s).')
        )
        skipped = len(mismatches) - repaired
        if skipped:
            self.stdout.write(
                self.style.ERROR(f'{skipped} balance(s) left unchanged; see the log.')
            )
