"""
Domain exceptions for analytics app.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidDateRangeError
    └── UserNotFoundError

Usage:
    from apps.analytics.exceptions import InvalidDateRangeError

    if start_date > end_date:
        raise InvalidDateRangeError("Start date must be before end date")
"""

from rest_framework.exceptions import APIException


class AnalyticsServiceError(APIException):
    """Base exception for all analytics service errors."""
    status_code = 400
    default_detail = 'Analytics request failed.'
    default_code = 'analytics_error'


class InvalidDateRangeError(AnalyticsServiceError):
    """
    Raised when start_date is after end_date.

    Example:
        raise InvalidDateRangeError("Start date must be before end date")
    """
    default_code = 'invalid_input'


class UserNotFoundError(AnalyticsServiceError):
    """Raised when the specified user does not exist."""
    status_code = 404
    default_detail = 'User not found.'
    default_code = 'not_found'
