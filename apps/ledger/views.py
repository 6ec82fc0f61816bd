from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .serializers import LedgerEntrySerializer, LedgerFilterSerializer, BalanceSummarySerializer
from .services import get_user_entries, get_balance_summary


class LedgerPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    parameters=[
        OpenApiParameter('kind', OpenApiTypes.STR, description='award | debit'),
    ],
    responses={200: LedgerEntrySerializer(many=True)},
    description="The caller's point history, newest first.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def entry_list(request):
    """List the current user's ledger entries."""
    filter_serializer = LedgerFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)

    entries = get_user_entries(
        user=request.user,
        kind=filter_serializer.validated_data.get('kind'),
    )

    paginator = LedgerPagination()
    page = paginator.paginate_queryset(entries, request)
    serializer = LedgerEntrySerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    responses={200: BalanceSummarySerializer},
    description="Current balance with the ledger totals it is derived from.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def balance(request):
    """Get the current user's balance summary."""
    summary = get_balance_summary(user=request.user)
    return Response(BalanceSummarySerializer(summary).data)
