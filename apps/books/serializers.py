import re

from rest_framework import serializers
from .models import Book, BookCategory, BookCondition, BookStatus, ReviewDecision, IMAGE_URL_PATTERN, MAX_REFERENCE_PRICE, validate_isbn
from apps.accounts.serializers import UserPublicSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class BookSubmitSerializer(serializers.Serializer):
    """
    Validate a donation before it reaches ``submit_book``.

    Fields:
        title (str): Book title
        author (str): Author name
        isbn (str): Optional ISBN-10/13
        category (str): Subject
        condition (str): Physical condition
        reference_price (int): Printed price in points
        description (str): Optional notes
        images (list[str]): Optional image URLs
    """

    title = serializers.CharField(max_length=200)
    author = serializers.CharField(max_length=100)
    isbn = serializers.CharField(
        max_length=32,
        required=False,
        allow_blank=True,
        validators=[validate_isbn],
    )
    category = serializers.ChoiceField(choices=BookCategory.choices)
    condition = serializers.ChoiceField(choices=BookCondition.choices)
    reference_price = serializers.IntegerField(min_value=1, max_value=MAX_REFERENCE_PRICE)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    images = serializers.ListField(
        child=serializers.RegexField(
            re.compile(IMAGE_URL_PATTERN, re.IGNORECASE),
            error_messages={
                'invalid': 'Image URLs must be http(s) links ending in .jpg, .jpeg, .png or .webp'
            },
        ),
        required=False,
        max_length=10,
    )


class ReviewDecisionSerializer(serializers.Serializer):
    """Reviewer decision for a pending book."""

    decision = serializers.ChoiceField(choices=ReviewDecision.choices)


class BookFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for book listing.

    Query Parameters:
        status (str): Filter by book status
        donor (UUID): Filter by donor ID
        category (str): Filter by subject
        search (str): Match title, author or ISBN
    """

    status = serializers.ChoiceField(choices=BookStatus.choices, required=False)
    donor = serializers.UUIDField(required=False)
    category = serializers.ChoiceField(choices=BookCategory.choices, required=False)
    search = serializers.CharField(max_length=200, required=False, allow_blank=True)


# =============================================================================
# Output Serializers
# =============================================================================

class BookListSerializer(serializers.ModelSerializer):
    """Compact book representation for listings."""

    donor = UserPublicSerializer(read_only=True)

    class Meta:
        model = Book
        fields = [
            'id',
            'title',
            'author',
            'category',
            'condition',
            'reference_price',
            'redemption_price',
            'status',
            'donor',
            'created_at',
        ]
        read_only_fields = fields


class BookSerializer(serializers.ModelSerializer):
    """Full book representation."""

    donor = UserPublicSerializer(read_only=True)
    reviewer = UserPublicSerializer(read_only=True)
    redeemer = UserPublicSerializer(read_only=True)

    class Meta:
        model = Book
        fields = [
            'id',
            'title',
            'author',
            'isbn',
            'category',
            'condition',
            'description',
            'images',
            'reference_price',
            'redemption_price',
            'status',
            'donor',
            'reviewer',
            'reviewed_at',
            'redeemer',
            'redeemed_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
