import pytest
from django.urls import reverse
from rest_framework import status
from apps.ledger.services import record_award, record_debit


@pytest.mark.django_db
class TestLedgerHistory:
    """Tests for GET /api/ledger/"""

    def test_lists_own_entries(self, contributor_client, contributor, other_contributor, book):
        record_award(user=contributor, book=book, amount=200, description='Donation')
        record_debit(user=contributor, book=book, amount=50, description='Redeemed')
        record_award(user=other_contributor, book=book, amount=10, description='Not mine')

        response = contributor_client.get(reverse('ledger:entry-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        first = response.data['results'][0]
        assert first['kind'] == 'debit'
        assert first['amount'] == 50
        assert first['book_title'] == book.title

    def test_kind_filter(self, contributor_client, contributor, book):
        record_award(user=contributor, book=book, amount=200, description='Donation')
        record_debit(user=contributor, book=book, amount=50, description='Redeemed')

        response = contributor_client.get(reverse('ledger:entry-list'), {'kind': 'award'})

        assert [e['amount'] for e in response.data['results']] == [200]

    def test_invalid_kind(self, contributor_client):
        response = contributor_client.get(reverse('ledger:entry-list'), {'kind': 'refund'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('ledger:entry-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestBalance:
    """Tests for GET /api/ledger/balance/"""

    def test_balance_summary(self, contributor_client, contributor, book):
        record_award(user=contributor, book=book, amount=200, description='Donation')

        response = contributor_client.get(reverse('ledger:balance'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['points_balance'] == 200
        assert response.data['ledger_balance'] == 200
        assert response.data['in_sync'] is True
