"""Book submission service - donors hand books in for review."""

import logging
import re
from typing import Optional

from django.db import transaction

from apps.accounts.models import User, UserRole
from apps.accounts.services import authorize
from apps.books.exceptions import ValidationError
from apps.books.models import (
    Book,
    BookCategory,
    BookCondition,
    BookStatus,
    ISBN_PATTERN,
    IMAGE_URL_PATTERN,
    MAX_REFERENCE_PRICE,
)
from apps.notifications.models import NotificationCategory
from apps.notifications.services import notify_role
from .pricing import compute_redemption_price

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000

_isbn_re = re.compile(ISBN_PATTERN)
_image_url_re = re.compile(IMAGE_URL_PATTERN, re.IGNORECASE)


def _require_text(value, field: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field.capitalize()} is required")
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError(f"{field.capitalize()} cannot exceed {max_length} characters")
    return value


def _validate_images(images) -> list[str]:
    if images is None:
        return []
    if not isinstance(images, (list, tuple)):
        raise ValidationError("Images must be a list of URLs")
    for url in images:
        if not isinstance(url, str) or not _image_url_re.match(url):
            raise ValidationError(
                "Image URLs must be http(s) links ending in .jpg, .jpeg, .png or .webp"
            )
    return list(images)


@transaction.atomic
def submit_book(
    *,
    donor: User,
    title: str,
    author: str,
    category: str,
    condition: str,
    reference_price: int,
    isbn: str = '',
    description: str = '',
    images: Optional[list[str]] = None
) -> Book:
    """
    Submit a book for review.

    This operation:
    1. Checks the donor may donate (contributor or administrator)
    2. Validates every field before writing anything
    3. Fixes the redemption price from the reference price
    4. Creates the book as pending
    5. Queues a notification to every active reviewer after commit

    Args:
        donor: User donating the book
        title: Book title (<= 200 chars)
        author: Author name (<= 100 chars)
        category: Subject, one of BookCategory
        condition: Physical condition, one of BookCondition
        reference_price: Printed price in points (1 to MAX_REFERENCE_PRICE)
        isbn: Optional ISBN-10/13
        description: Optional notes (<= 1000 chars)
        images: Optional list of image URLs

    Returns:
        Created Book instance

    Raises:
        AuthenticationError: If donor is anonymous or inactive
        AuthorizationError: If donor is a reviewer
        ValidationError: If any field is missing or malformed
    """
    authorize(user=donor, roles=(UserRole.CONTRIBUTOR, UserRole.ADMINISTRATOR))

    title = _require_text(title, 'title', TITLE_MAX_LENGTH)
    author = _require_text(author, 'author', AUTHOR_MAX_LENGTH)

    if category not in BookCategory.values:
        raise ValidationError(f"Unknown category: {category}")
    if condition not in BookCondition.values:
        raise ValidationError(f"Unknown condition: {condition}")

    if (
        not isinstance(reference_price, int)
        or isinstance(reference_price, bool)
        or reference_price <= 0
    ):
        raise ValidationError("Reference price must be a positive whole number")
    if reference_price > MAX_REFERENCE_PRICE:
        raise ValidationError(f"Reference price cannot exceed {MAX_REFERENCE_PRICE}")

    isbn = (isbn or '').strip()
    if isbn and not _isbn_re.match(isbn):
        raise ValidationError("Please enter a valid ISBN")

    description = (description or '').strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
        )

    images = _validate_images(images)

    book = Book.objects.create(
        title=title,
        author=author,
        isbn=isbn,
        category=category,
        condition=condition,
        description=description,
        images=images,
        reference_price=reference_price,
        redemption_price=compute_redemption_price(reference_price),
        status=BookStatus.PENDING,
        donor=donor,
    )

    logger.info("Book %s submitted by %s", book.id, donor.id)

    notify_role(
        role=UserRole.REVIEWER,
        category=NotificationCategory.ITEM_SUBMITTED,
        title='New Book Donation',
        message=f'A new book "{book.title}" has been submitted for verification.',
        book=book,
    )

    return book
