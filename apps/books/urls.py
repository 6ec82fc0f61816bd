from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'books'

# SimpleRouter: an API root view would shadow the list route at the empty prefix
router = SimpleRouter()
router.register(r'', views.BookViewSet, basename='book')

urlpatterns = [
    # GET    /api/books/               - List visible books
    # POST   /api/books/               - Donate a book
    # GET    /api/books/mine/          - Own donations
    # GET    /api/books/{id}/          - Book details
    # POST   /api/books/{id}/review/   - Approve or reject (reviewers)
    # POST   /api/books/{id}/redeem/   - Redeem with points
    path('', include(router.urls)),
]
