# ==========================================
# apps/ledger/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import LedgerEntry, LedgerEntryKind


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    """
    Read-only view of the point ledger.

    Entries are append-only; drift between cached balances and the ledger
    is repaired with ``manage.py verify_ledger --fix``.
    """

    list_display = [
        'user',
        'kind_badge',
        'amount',
        'status',
        'book',
        'created_at',
    ]

    list_filter = [
        'kind',
        'status',
        'created_at',
    ]

    search_fields = [
        'user__email',
        'book__title',
        'description',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    def kind_badge(self, obj):
        """Display award/debit as colored badge."""
        if obj.kind == LedgerEntryKind.AWARD:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">+{}</span>',
                obj.amount
            )
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">-{}</span>',
            obj.amount
        )
    kind_badge.short_description = 'Kind'
    kind_badge.admin_order_field = 'kind'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
