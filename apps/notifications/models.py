from django.db import models
import uuid


class NotificationCategory(models.TextChoices):
    ITEM_SUBMITTED = 'item_submitted', 'Book submitted'
    ITEM_APPROVED = 'item_approved', 'Book approved'
    ITEM_REJECTED = 'item_rejected', 'Book rejected'
    ITEM_REDEEMED = 'item_redeemed', 'Book redeemed'
    INFO = 'info', 'Information'


class Notification(models.Model):
    """In-app message for a single recipient."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    category = models.CharField(
        max_length=20,
        choices=NotificationCategory.choices,
        default=NotificationCategory.INFO,
    )
    title = models.CharField(max_length=100)
    message = models.CharField(max_length=500)
    book = models.ForeignKey(
        'books.Book',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='notifications'
    )
    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        indexes = [
            models.Index(fields=['user', 'is_read', 'created_at'], name='notif_user_read_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} -> {self.user}"
