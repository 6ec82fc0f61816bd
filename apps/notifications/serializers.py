from rest_framework import serializers
from .models import Notification


class NotificationFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the inbox.

    Query Parameters:
        unread (bool): Only unread notifications
    """

    unread = serializers.BooleanField(required=False, default=False)


class NotificationSerializer(serializers.ModelSerializer):

    class Meta:
        model = Notification
        fields = [
            'id',
            'category',
            'title',
            'message',
            'book',
            'is_read',
            'created_at',
        ]
        read_only_fields = fields


class UnreadCountSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()


class MarkAllReadResponseSerializer(serializers.Serializer):
    marked = serializers.IntegerField()
