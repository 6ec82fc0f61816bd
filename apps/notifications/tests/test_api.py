import pytest
from django.urls import reverse
from rest_framework import status
from apps.notifications.models import Notification


@pytest.mark.django_db
class TestNotificationList:
    """Tests for GET /api/notifications/"""

    def test_list(self, contributor_client, inbox):
        response = contributor_client.get(reverse('notifications:notification-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3

    def test_unread_filter(self, contributor_client, inbox):
        response = contributor_client.get(
            reverse('notifications:notification-list'), {'unread': 'true'}
        )

        assert response.data['count'] == 2
        assert all(not n['is_read'] for n in response.data['results'])

    def test_unread_count(self, contributor_client, inbox):
        response = contributor_client.get(reverse('notifications:unread-count'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'unread_count': 2}

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('notifications:notification-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMarkRead:
    """Tests for POST /api/notifications/{id}/read/ and /read-all/"""

    def test_mark_read(self, contributor_client, inbox):
        url = reverse('notifications:read', kwargs={'pk': inbox[0].id})

        response = contributor_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_read'] is True

    def test_other_users_notification_not_found(self, contributor_client, other_contributor):
        theirs = Notification.objects.create(
            user=other_contributor, title='Private', message='Not yours.'
        )
        url = reverse('notifications:read', kwargs={'pk': theirs.id})

        response = contributor_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_mark_all_read(self, contributor_client, inbox):
        response = contributor_client.post(reverse('notifications:read-all'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'marked': 2}
