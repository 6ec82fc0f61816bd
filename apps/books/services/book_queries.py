"""Book read service - visibility rules and lookups."""

import logging
import time
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import connection, OperationalError
from django.db.models import Q, QuerySet

from apps.accounts.models import User, UserRole
from apps.accounts.services import authorize
from apps.books.exceptions import BookNotFoundError, ValidationError
from apps.books.models import Book, BookStatus

logger = logging.getLogger(__name__)


def _retry_read(fetch):
    """
    Run an idempotent read, retrying when the database connection fails.

    Inside a transaction the failure is raised at once, since the
    transaction is already broken and must be rolled back by its owner.
    """
    attempts = max(1, settings.MARKETPLACE['READ_RETRY_ATTEMPTS'])
    delay = settings.MARKETPLACE['READ_RETRY_DELAY_SECONDS']

    for attempt in range(1, attempts + 1):
        try:
            return fetch()
        except OperationalError:
            if attempt == attempts or connection.in_atomic_block:
                raise
            logger.warning(
                "Read failed (attempt %s of %s), retrying", attempt, attempts,
                exc_info=True,
            )
            # Drop the broken connection; Django opens a new one on next use
            connection.close()
            time.sleep(delay * attempt)


def fetch_book(book_id: UUID, *, queryset: Optional[QuerySet] = None) -> Book:
    """
    Load a book or raise ``BookNotFoundError``.

    Malformed ids are treated as missing books.
    """
    queryset = queryset if queryset is not None else Book.objects.all()
    try:
        return queryset.select_related('donor', 'reviewer', 'redeemer').get(id=book_id)
    except (Book.DoesNotExist, DjangoValidationError, ValueError):
        raise BookNotFoundError()


def get_book_by_id(*, book_id: UUID) -> Book:
    """
    Get a single book, retrying transparently on connection failures.

    Raises:
        BookNotFoundError: If the book doesn't exist
    """
    return _retry_read(lambda: fetch_book(book_id))


def _visible_to(viewer: User) -> Q:
    if viewer.is_administrator:
        return Q()

    visible = Q(status=BookStatus.APPROVED)
    if viewer.is_contributor:
        visible |= Q(donor=viewer)
    if viewer.is_reviewer:
        visible |= Q(status=BookStatus.PENDING)
    return visible


def can_view_book(*, viewer: User, book: Book) -> bool:
    """Whether ``viewer`` may see ``book`` under the listing visibility rules."""
    if viewer.is_administrator or book.status == BookStatus.APPROVED:
        return True
    if viewer.is_contributor and book.donor_id == viewer.id:
        return True
    if viewer.is_reviewer and book.status == BookStatus.PENDING:
        return True
    return False


def get_visible_book(*, viewer: User, book_id: UUID) -> Book:
    """
    Get a book the viewer is allowed to see.

    Books outside the viewer's visibility are reported as missing.

    Raises:
        BookNotFoundError: If the book doesn't exist or is not visible
    """
    book = get_book_by_id(book_id=book_id)
    if not can_view_book(viewer=viewer, book=book):
        raise BookNotFoundError()
    return book


def list_books(
    *,
    viewer: User,
    status: Optional[str] = None,
    donor_id: Optional[UUID] = None
) -> QuerySet[Book]:
    """
    List books visible to ``viewer``, newest first.

    Administrators see every book. Everyone sees approved books;
    contributors also see their own donations and reviewers also see
    the pending queue.

    Args:
        viewer: User asking
        status: Optional status filter
        donor_id: Optional donor filter

    Returns:
        Lazy QuerySet of Book

    Raises:
        AuthenticationError: If viewer is anonymous or inactive
        ValidationError: If status is not a known book status
    """
    authorize(user=viewer, roles=UserRole.values)

    queryset = Book.objects.select_related('donor', 'reviewer', 'redeemer').filter(
        _visible_to(viewer)
    )

    if status:
        if status not in BookStatus.values:
            raise ValidationError(f"Unknown status: {status}")
        queryset = queryset.filter(status=status)

    if donor_id:
        queryset = queryset.filter(donor_id=donor_id)

    return queryset.order_by('-created_at')
