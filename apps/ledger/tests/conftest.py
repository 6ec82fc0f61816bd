import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.books.models import BookCategory, BookCondition
from apps.books.services import submit_book


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def contributor(db):
    """Create and return a contributor with an empty balance."""
    return User.objects.create_user(
        email='ledger@example.com',
        password='TestPass123!',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def other_contributor(db):
    return User.objects.create_user(
        email='someone@example.com',
        password='TestPass123!',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def book(contributor):
    """A pending book the ledger entries can point at."""
    return submit_book(
        donor=contributor,
        title='Linear Algebra Done Right',
        author='Sheldon Axler',
        category=BookCategory.MATHEMATICS,
        condition=BookCondition.EXCELLENT,
        reference_price=500,
    )


@pytest.fixture
def contributor_client(contributor):
    """Return an API client authenticated as the contributor."""
    client = APIClient()
    refresh = RefreshToken.for_user(contributor)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
