from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.db.models import Q
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.permissions import CanSubmitBook, IsReviewer
from apps.accounts.views import ErrorResponseSerializer
from .serializers import (
    BookSerializer,
    BookListSerializer,
    BookSubmitSerializer,
    BookFilterSerializer,
    ReviewDecisionSerializer,
)
from .services import (
    submit_book,
    review_book,
    redeem_book,
    list_books,
    get_visible_book,
)


class BookPagination(PageNumberPagination):
    """Custom pagination for books."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class BookViewSet(viewsets.GenericViewSet):
    """
    Donation workflow endpoints.

    list: Books visible to the caller (filterable)
    create: Donate a book (contributors and administrators)
    retrieve: Get a visible book
    mine: The caller's own donations
    review: Approve or reject a pending book (reviewers)
    redeem: Spend points on an approved book
    """

    serializer_class = BookSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = BookPagination

    def get_permissions(self):
        """Use different permissions for different actions."""
        if self.action == 'create':
            return [IsAuthenticated(), CanSubmitBook()]
        elif self.action == 'review':
            return [IsAuthenticated(), IsReviewer()]
        return super().get_permissions()

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action in ['list', 'mine']:
            return BookListSerializer
        elif self.action == 'create':
            return BookSubmitSerializer
        elif self.action == 'review':
            return ReviewDecisionSerializer
        return BookSerializer

    def get_queryset(self):
        """Filter visible books using input serializer validation."""
        filter_serializer = BookFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        queryset = list_books(
            viewer=self.request.user,
            status=params.get('status'),
            donor_id=params.get('donor'),
        )

        if params.get('category'):
            queryset = queryset.filter(category=params['category'])

        search = params.get('search')
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search) |
                Q(author__icontains=search) |
                Q(isbn__icontains=search)
            )

        return queryset

    def _paginated(self, queryset):
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = BookListSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(BookListSerializer(queryset, many=True).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('status', OpenApiTypes.STR, description='pending | approved | rejected | redeemed'),
            OpenApiParameter('donor', OpenApiTypes.UUID, description='Filter by donor ID'),
            OpenApiParameter('category', OpenApiTypes.STR, description='Filter by subject'),
            OpenApiParameter('search', OpenApiTypes.STR, description='Match title, author or ISBN'),
        ],
        responses={200: BookListSerializer(many=True)},
        tags=['books'],
    )
    def list(self, request):
        """
        List books visible to the caller.

        GET /api/books/
        """
        return self._paginated(self.get_queryset())

    @extend_schema(
        request=BookSubmitSerializer,
        responses={
            201: BookSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
        },
        tags=['books'],
    )
    def create(self, request):
        """
        Donate a book for review.

        POST /api/books/
        """
        serializer = BookSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        book = submit_book(donor=request.user, **serializer.validated_data)

        return Response(BookSerializer(book).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        responses={200: BookSerializer, 404: ErrorResponseSerializer},
        tags=['books'],
    )
    def retrieve(self, request, pk=None):
        """
        Get a single book.

        GET /api/books/{id}/
        """
        book = get_visible_book(viewer=request.user, book_id=pk)
        return Response(BookSerializer(book).data)

    @extend_schema(
        responses={200: BookListSerializer(many=True)},
        tags=['books'],
    )
    @action(detail=False, methods=['get'])
    def mine(self, request):
        """
        The caller's own donations, every status.

        GET /api/books/mine/
        """
        queryset = list_books(viewer=request.user, donor_id=request.user.id)
        return self._paginated(queryset)

    @extend_schema(
        request=ReviewDecisionSerializer,
        responses={
            200: BookSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        tags=['books'],
    )
    @action(detail=True, methods=['post'])
    def review(self, request, pk=None):
        """
        Approve or reject a pending book.

        POST /api/books/{id}/review/
        Body: {"decision": "approve" | "reject"}
        """
        serializer = ReviewDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        book = review_book(
            reviewer=request.user,
            book_id=pk,
            decision=serializer.validated_data['decision'],
        )
        return Response(BookSerializer(book).data)

    @extend_schema(
        request=None,
        responses={
            200: BookSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        tags=['books'],
    )
    @action(detail=True, methods=['post'])
    def redeem(self, request, pk=None):
        """
        Redeem an approved book with reward points.

        POST /api/books/{id}/redeem/
        """
        book = redeem_book(redeemer=request.user, book_id=pk)
        return Response(BookSerializer(book).data)
