from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.permissions import IsAdministrator
from apps.accounts.views import ErrorResponseSerializer
from .analytics import AnalyticsQueries
from .serializers import (
    PeriodQuerySerializer,
    PlatformOverviewSerializer,
    UserSummarySerializer,
)
from .permissions import CanViewUserSummary


@extend_schema(
    parameters=[
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    ],
    responses={
        200: PlatformOverviewSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Users per role, books per status and point flows (administrators only).",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdministrator])
def platform_overview(request):
    """Administrator dashboard figures - thin HTTP handler."""
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = AnalyticsQueries.platform_overview(
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )

    return Response(PlatformOverviewSerializer(data).data)


@extend_schema(
    responses={
        200: UserSummarySerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Balance, donations and redemptions for the current user, or any user for administrators.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanViewUserSummary])
def user_summary(request, user_id=None):
    """Per-user dashboard figures - thin HTTP handler."""
    target_user_id = user_id if user_id is not None else request.user.id

    data = AnalyticsQueries.user_summary(user_id=target_user_id)

    return Response(UserSummarySerializer(data).data)
