from rest_framework.exceptions import APIException


class NotificationError(APIException):
    """Base exception for notification errors."""
    status_code = 400
    default_detail = 'Notification request failed.'
    default_code = 'notification_error'


class NotificationNotFoundError(NotificationError):
    """Notification does not exist or belongs to someone else."""
    status_code = 404
    default_detail = 'Notification not found.'
    default_code = 'not_found'
