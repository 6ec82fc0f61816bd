import uuid

import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestPlatformOverviewAPI:
    """Tests for GET /api/analytics/overview/"""

    def test_administrator(self, administrator_client, marketplace):
        response = administrator_client.get(reverse('analytics:overview'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['books']['total'] == 5
        assert response.data['points']['utilisation_pct'] == 50

    def test_period_filter(self, administrator_client, marketplace):
        response = administrator_client.get(reverse('analytics:overview'), {'period': '2000-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['books']['total'] == 0

    def test_invalid_period(self, administrator_client):
        response = administrator_client.get(reverse('analytics:overview'), {'period': '2025-13'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_reviewer_forbidden(self, reviewer_client):
        response = reviewer_client.get(reverse('analytics:overview'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'not_authorized'

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('analytics:overview'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUserSummaryAPI:
    """Tests for GET /api/analytics/me/ and /api/analytics/users/{id}/"""

    def test_own_summary(self, donor_client, marketplace, donor):
        response = donor_client.get(reverse('analytics:my-summary'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user_id'] == str(donor.id)
        assert response.data['points_balance'] == 600

    def test_other_user_forbidden(self, donor_client, reader):
        url = reverse('analytics:user-summary', kwargs={'user_id': reader.id})

        response = donor_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'not_authorized'

    def test_administrator_views_any_user(self, administrator_client, marketplace, reader):
        url = reverse('analytics:user-summary', kwargs={'user_id': reader.id})

        response = administrator_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['books_redeemed'] == 1

    def test_unknown_user(self, administrator_client):
        url = reverse('analytics:user-summary', kwargs={'user_id': uuid.uuid4()})

        response = administrator_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'
