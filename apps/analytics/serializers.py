"""
Serializers for analytics app.

Input Serializers:
    PeriodQuerySerializer - Validates month period and date range parameters

Response Serializers:
    PlatformOverviewSerializer - Administrator dashboard figures
    UserSummarySerializer - One user's dashboard card
"""

import calendar
from datetime import date

from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate period and date range query parameters.

    Query Parameters:
        period (str): Month in YYYY-MM format (e.g., '2025-01')
        start_date (date): Start of date range
        end_date (date): End of date range

    Note:
        A 'period' takes precedence and becomes start_date and end_date
        spanning that whole month.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        period = attrs.get('period')
        if period:
            year, month = (int(part) for part in period.split('-'))
            attrs['start_date'] = date(year, month, 1)
            attrs['end_date'] = date(year, month, calendar.monthrange(year, month)[1])

        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        return attrs


# =============================================================================
# Response Serializers
# =============================================================================

class UserRoleCountsSerializer(serializers.Serializer):
    contributor = serializers.IntegerField()
    reviewer = serializers.IntegerField()
    administrator = serializers.IntegerField()


class BookStatusCountsSerializer(serializers.Serializer):
    pending = serializers.IntegerField()
    approved = serializers.IntegerField()
    rejected = serializers.IntegerField()
    redeemed = serializers.IntegerField()


class UserTotalsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    by_role = UserRoleCountsSerializer()


class BookTotalsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    by_status = BookStatusCountsSerializer()


class PointFlowSerializer(serializers.Serializer):
    distributed = serializers.IntegerField()
    redeemed = serializers.IntegerField()
    outstanding = serializers.IntegerField()
    utilisation_pct = serializers.IntegerField()


class PlatformOverviewSerializer(serializers.Serializer):
    """Response serializer for the administrator dashboard."""
    users = UserTotalsSerializer()
    books = BookTotalsSerializer()
    points = PointFlowSerializer()


class UserSummarySerializer(serializers.Serializer):
    """Response serializer for a single user's figures."""
    user_id = serializers.UUIDField()
    role = serializers.CharField()
    points_balance = serializers.IntegerField()
    points_earned = serializers.IntegerField()
    points_spent = serializers.IntegerField()
    donations = BookTotalsSerializer()
    books_redeemed = serializers.IntegerField()
    books_reviewed = serializers.IntegerField()
