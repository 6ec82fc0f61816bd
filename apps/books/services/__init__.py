"""
Books services - the donation workflow.

    submit_book   contributor hands in a book      -> pending
    review_book   reviewer approves or rejects      pending -> approved | rejected
    redeem_book   user spends points on a book      approved -> redeemed

Point movements go through ``apps.ledger.services``; notifications are
queued through ``apps.notifications.services`` and stored after commit.
"""

from .pricing import (
    compute_award,
    compute_redemption_price,
)

from .submission import submit_book

from .moderation import review_book

from .redemption import redeem_book

from .book_queries import (
    fetch_book,
    get_book_by_id,
    get_visible_book,
    can_view_book,
    list_books,
)


__all__ = [
    # Pricing
    'compute_award',
    'compute_redemption_price',
    # Workflow
    'submit_book',
    'review_book',
    'redeem_book',
    # Queries
    'fetch_book',
    'get_book_by_id',
    'get_visible_book',
    'can_view_book',
    'list_books',
]
