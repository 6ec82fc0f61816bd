from rest_framework import serializers
from .models import LedgerEntry, LedgerEntryKind


class LedgerFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for ledger history.

    Query Parameters:
        kind (str): award | debit
    """

    kind = serializers.ChoiceField(choices=LedgerEntryKind.choices, required=False)


class LedgerEntrySerializer(serializers.ModelSerializer):
    """A single point movement."""

    book_title = serializers.CharField(source='book.title', read_only=True)

    class Meta:
        model = LedgerEntry
        fields = [
            'id',
            'kind',
            'amount',
            'status',
            'description',
            'book',
            'book_title',
            'created_at',
        ]
        read_only_fields = fields


class BalanceSummarySerializer(serializers.Serializer):
    points_balance = serializers.IntegerField()
    total_awarded = serializers.IntegerField()
    total_debited = serializers.IntegerField()
    ledger_balance = serializers.IntegerField()
    in_sync = serializers.BooleanField()
