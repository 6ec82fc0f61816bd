import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def contributor(db):
    """Create and return a contributor."""
    return User.objects.create_user(
        email='contributor@example.com',
        password='TestPass123!',
        display_name='Test Contributor',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def reviewer(db):
    """Create and return an institutional reviewer."""
    return User.objects.create_user(
        email='reviewer@example.com',
        password='TestPass123!',
        display_name='Test Reviewer',
        role=UserRole.REVIEWER,
        institution='Central Library',
    )


@pytest.fixture
def administrator(db):
    """Create and return a platform administrator."""
    return User.objects.create_superuser(
        email='administrator@example.com',
        password='TestPass123!',
        display_name='Test Administrator',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        display_name='Inactive User',
        is_active=False,
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def contributor_client(contributor):
    """Return an API client authenticated as the contributor."""
    return _client_for(contributor)


@pytest.fixture
def reviewer_client(reviewer):
    """Return an API client authenticated as the reviewer."""
    return _client_for(reviewer)


@pytest.fixture
def administrator_client(administrator):
    """Return an API client authenticated as the administrator."""
    return _client_for(administrator)
