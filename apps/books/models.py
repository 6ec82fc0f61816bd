from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models
import uuid


# ISBN-10 or ISBN-13, optionally prefixed and hyphen/space separated
ISBN_PATTERN = (
    r'^(?:ISBN(?:-1[03])?:? )?'
    r'(?=[0-9X]{10}$|(?=(?:[0-9]+[- ]){3})[- 0-9X]{13}$|97[89][0-9]{10}$|(?=(?:[0-9]+[- ]){4})[- 0-9]{17}$)'
    r'(?:97[89][- ]?)?[0-9]{1,5}[- ]?[0-9]+[- ]?[0-9]+[- ]?[0-9X]$'
)
IMAGE_URL_PATTERN = r'^https?://.+\.(jpg|jpeg|png|webp)$'

# Keeps awards and redemption prices well inside a 32-bit integer column
MAX_REFERENCE_PRICE = 1_000_000

validate_isbn = RegexValidator(ISBN_PATTERN, 'Please enter a valid ISBN.')


class BookStatus(models.TextChoices):
    PENDING = 'pending', 'Pending review'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'
    REDEEMED = 'redeemed', 'Redeemed'


class BookCondition(models.TextChoices):
    EXCELLENT = 'excellent', 'Excellent'
    GOOD = 'good', 'Good'
    FAIR = 'fair', 'Fair'
    POOR = 'poor', 'Poor'


class BookCategory(models.TextChoices):
    MATHEMATICS = 'Mathematics', 'Mathematics'
    SCIENCE = 'Science', 'Science'
    ENGLISH = 'English', 'English'
    HISTORY = 'History', 'History'
    GEOGRAPHY = 'Geography', 'Geography'
    COMPUTER_SCIENCE = 'Computer Science', 'Computer Science'
    PHYSICS = 'Physics', 'Physics'
    CHEMISTRY = 'Chemistry', 'Chemistry'
    BIOLOGY = 'Biology', 'Biology'
    ECONOMICS = 'Economics', 'Economics'
    OTHER = 'Other', 'Other'


# pending -> approved | rejected, approved -> redeemed; nothing else.
ALLOWED_TRANSITIONS = {
    BookStatus.PENDING: frozenset({BookStatus.APPROVED, BookStatus.REJECTED}),
    BookStatus.APPROVED: frozenset({BookStatus.REDEEMED}),
    BookStatus.REJECTED: frozenset(),
    BookStatus.REDEEMED: frozenset(),
}


class Book(models.Model):
    """A donated book moving through review and redemption."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Bibliographic details
    title = models.CharField(max_length=200)
    author = models.CharField(max_length=100)
    isbn = models.CharField(max_length=32, blank=True, validators=[validate_isbn])
    category = models.CharField(max_length=32, choices=BookCategory.choices)
    condition = models.CharField(max_length=16, choices=BookCondition.choices)
    description = models.TextField(max_length=1000, blank=True)
    images = models.JSONField(default=list, blank=True)

    # Pricing (points)
    reference_price = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(MAX_REFERENCE_PRICE)]
    )
    redemption_price = models.PositiveIntegerField()

    # Lifecycle
    status = models.CharField(
        max_length=16,
        choices=BookStatus.choices,
        default=BookStatus.PENDING,
    )
    donor = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='donated_books'
    )
    reviewer = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='reviewed_books'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    redeemer = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='redeemed_books'
    )
    redeemed_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'books'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='books_status_created_idx'),
            models.Index(fields=['donor', 'created_at'], name='books_donor_created_idx'),
            models.Index(fields=['category'], name='books_category_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(reference_price__gte=1),
                name='books_reference_price_positive',
            ),
            models.CheckConstraint(
                condition=~models.Q(status='redeemed') | models.Q(redeemer__isnull=False),
                name='books_redeemed_has_redeemer',
            ),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} by {self.author} ({self.status})"

    def can_transition_to(self, new_status):
        return new_status in ALLOWED_TRANSITIONS.get(self.status, frozenset())

    @property
    def is_available(self):
        return self.status == BookStatus.APPROVED


class ReviewDecision(models.TextChoices):
    APPROVE = 'approve', 'Approve'
    REJECT = 'reject', 'Reject'
