import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.notifications.models import Notification, NotificationCategory


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def contributor(db):
    return User.objects.create_user(
        email='inbox@example.com',
        password='TestPass123!',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def other_contributor(db):
    return User.objects.create_user(
        email='neighbour@example.com',
        password='TestPass123!',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def reviewers(db):
    """Two active reviewers and one deactivated reviewer."""
    return [
        User.objects.create_user(
            email=f'reviewer{i}@example.com',
            password='TestPass123!',
            role=UserRole.REVIEWER,
            institution='Central Library',
            is_active=active,
        )
        for i, active in enumerate([True, True, False])
    ]


@pytest.fixture
def inbox(contributor):
    """Two unread notifications and one read notification for the contributor."""
    return [
        Notification.objects.create(
            user=contributor,
            category=NotificationCategory.INFO,
            title=f'Notice {i}',
            message=f'Message {i}',
            is_read=is_read,
        )
        for i, is_read in enumerate([False, False, True])
    ]


@pytest.fixture
def contributor_client(contributor):
    client = APIClient()
    refresh = RefreshToken.for_user(contributor)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
