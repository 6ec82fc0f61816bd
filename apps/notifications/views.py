from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.views import ErrorResponseSerializer
from .serializers import (
    NotificationSerializer,
    NotificationFilterSerializer,
    UnreadCountSerializer,
    MarkAllReadResponseSerializer,
)
from .services import (
    get_user_notifications,
    get_unread_count,
    mark_as_read,
    mark_all_as_read,
)


class NotificationPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    parameters=[
        OpenApiParameter('unread', OpenApiTypes.BOOL, description='Only unread notifications'),
    ],
    responses={200: NotificationSerializer(many=True)},
    tags=['notifications'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_list(request):
    """List the current user's notifications, newest first."""
    filter_serializer = NotificationFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)

    notifications = get_user_notifications(
        user=request.user,
        unread_only=filter_serializer.validated_data['unread'],
    )

    paginator = NotificationPagination()
    page = paginator.paginate_queryset(notifications, request)
    serializer = NotificationSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    responses={200: UnreadCountSerializer},
    tags=['notifications'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unread_count(request):
    """Number of unread notifications."""
    return Response({'unread_count': get_unread_count(user=request.user)})


@extend_schema(
    request=None,
    responses={200: NotificationSerializer, 404: ErrorResponseSerializer},
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_read(request, pk):
    """Mark one notification as read."""
    notification = mark_as_read(notification_id=pk, user=request.user)
    return Response(NotificationSerializer(notification).data)


@extend_schema(
    request=None,
    responses={200: MarkAllReadResponseSerializer},
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_all_read(request):
    """Mark every notification as read."""
    return Response({'marked': mark_all_as_read(user=request.user)})
