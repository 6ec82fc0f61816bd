"""
Analytics Module
=================

Read-only aggregate queries over users, books and the point ledger. They
power the administrator dashboard and the per-user summary card.

Classes:
    AnalyticsQueries: Static methods for the dashboard figures.

Example:
    Getting platform figures for the admin dashboard::

        from apps.analytics.analytics import AnalyticsQueries

        overview = AnalyticsQueries.platform_overview()
        print(f"{overview['points']['distributed']} points distributed")
        print(f"Utilisation: {overview['points']['utilisation_pct']}%")

Note:
    All methods return plain dictionaries, suitable for JSON responses,
    and never modify data.
"""

from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count, Sum, IntegerField
from django.db.models.functions import Coalesce

from apps.accounts.models import User, UserRole
from apps.books.models import Book, BookStatus
from apps.ledger.models import LedgerEntry
from .exceptions import InvalidDateRangeError, UserNotFoundError


def _counts_by(queryset, field, choices):
    """Count rows per choice value, including choices with no rows."""
    counts = {value: 0 for value in choices.values}
    for row in queryset.order_by().values(field).annotate(count=Count('id')):
        counts[row[field]] = row['count']
    return counts


def _utilisation_pct(used: int, distributed: int) -> int:
    if distributed <= 0:
        return 0
    ratio = Decimal(used) * 100 / Decimal(distributed)
    return int(ratio.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class AnalyticsQueries:
    """
    Aggregate queries for analytics endpoints.

    Methods:
        platform_overview: Users per role, books per status and point flows.
        user_summary: One user's balance, donations and redemptions.
    """

    @staticmethod
    def platform_overview(start_date=None, end_date=None):
        """
        Platform-wide figures for the administrator dashboard.

        Args:
            start_date (date, optional): Only count books and ledger entries
                created on or after this date.
            end_date (date, optional): Only count books and ledger entries
                created on or before this date.

        Returns:
            dict: Overview with the following structure::

                {
                    'users': {'total': 12, 'by_role': {'contributor': 9, ...}},
                    'books': {'total': 40, 'by_status': {'pending': 5, ...}},
                    'points': {
                        'distributed': 4200,
                        'redeemed': 3000,
                        'outstanding': 1200,
                        'utilisation_pct': 71,
                    },
                }

        Raises:
            InvalidDateRangeError: If start_date is after end_date.
        """
        if start_date and end_date and start_date > end_date:
            raise InvalidDateRangeError("Start date must be before end date")

        books = Book.objects.all()
        entries = LedgerEntry.objects.all()
        if start_date:
            books = books.filter(created_at__date__gte=start_date)
            entries = entries.filter(created_at__date__gte=start_date)
        if end_date:
            books = books.filter(created_at__date__lte=end_date)
            entries = entries.filter(created_at__date__lte=end_date)

        users_by_role = _counts_by(User.objects.filter(is_active=True), 'role', UserRole)
        books_by_status = _counts_by(books, 'status', BookStatus)

        totals = entries.totals()
        outstanding = User.objects.aggregate(
            total=Coalesce(Sum('points_balance'), 0, output_field=IntegerField())
        )['total']

        return {
            'users': {
                'total': sum(users_by_role.values()),
                'by_role': users_by_role,
            },
            'books': {
                'total': sum(books_by_status.values()),
                'by_status': books_by_status,
            },
            'points': {
                'distributed': totals['awarded'],
                'redeemed': totals['debited'],
                'outstanding': outstanding,
                'utilisation_pct': _utilisation_pct(totals['debited'], totals['awarded']),
            },
        }

    @staticmethod
    def user_summary(user_id):
        """
        Figures for one user's dashboard card.

        Args:
            user_id (UUID): The user to summarise.

        Returns:
            dict: Summary with the following structure::

                {
                    'user_id': '...',
                    'role': 'contributor',
                    'points_balance': 400,
                    'points_earned': 1000,
                    'points_spent': 600,
                    'donations': {'total': 3, 'by_status': {...}},
                    'books_redeemed': 1,
                    'books_reviewed': 0,
                }

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise UserNotFoundError("User not found")

        donations = _counts_by(Book.objects.filter(donor=user), 'status', BookStatus)
        totals = LedgerEntry.objects.filter(user=user).totals()

        return {
            'user_id': user.id,
            'role': user.role,
            'points_balance': user.points_balance,
            'points_earned': totals['awarded'],
            'points_spent': totals['debited'],
            'donations': {
                'total': sum(donations.values()),
                'by_status': donations,
            },
            'books_redeemed': Book.objects.filter(redeemer=user).count(),
            'books_reviewed': Book.objects.filter(reviewer=user).count(),
        }
