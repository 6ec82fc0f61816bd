# ==========================================
# apps/books/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Book, BookStatus


@admin.register(Book)
class BookAdmin(admin.ModelAdmin):
    """
    Admin interface for donated books.

    Status, reviewer and redeemer are read-only: they only change through
    the workflow services so the ledger stays in step with balances.
    """

    list_display = [
        'title',
        'author',
        'category',
        'donor',
        'reference_price',
        'redemption_price',
        'status_badge',
        'created_at',
    ]

    list_filter = [
        'status',
        'category',
        'condition',
        'created_at',
    ]

    search_fields = [
        'title',
        'author',
        'isbn',
        'donor__email',
        'donor__display_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Book', {
            'fields': ('title', 'author', 'isbn', 'category', 'condition', 'description', 'images')
        }),
        ('Pricing', {
            'fields': ('reference_price', 'redemption_price'),
        }),
        ('Workflow', {
            'fields': ('status', 'donor', 'reviewer', 'reviewed_at', 'redeemer', 'redeemed_at'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    readonly_fields = [
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

    def status_badge(self, obj):
        """Display workflow status as colored badge."""
        colors = {
            BookStatus.PENDING: ('#E5C49A', '#2C1810'),
            BookStatus.APPROVED: ('#6B8E5E', 'white'),
            BookStatus.REJECTED: ('#B85C5C', 'white'),
            BookStatus.REDEEMED: ('#A47449', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_add_permission(self, request):
        """Books are created through the donation workflow."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Books carry ledger history and cannot be deleted."""
        return False
