from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):

    list_display = [
        'title',
        'user',
        'category',
        'is_read',
        'created_at',
    ]

    list_filter = [
        'category',
        'is_read',
        'created_at',
    ]

    search_fields = [
        'title',
        'message',
        'user__email',
    ]

    ordering = ['-created_at']
    readonly_fields = ['created_at']

    actions = ['mark_as_read']

    @admin.action(description='Mark selected notifications as read')
    def mark_as_read(self, request, queryset):
        count = queryset.update(is_read=True)
        self.message_user(request, f'Marked {count} notification(s) as read.')
