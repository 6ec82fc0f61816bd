import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.books.models import ReviewDecision
from apps.books.services import redeem_book, review_book, submit_book


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def donor(db):
    return User.objects.create_user(
        email='analytics_donor@example.com',
        password='TestPass123!',
        display_name='Analytics Donor',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def reader(db):
    return User.objects.create_user(
        email='analytics_reader@example.com',
        password='TestPass123!',
        display_name='Analytics Reader',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def reviewer(db):
    return User.objects.create_user(
        email='analytics_reviewer@example.com',
        password='TestPass123!',
        display_name='Analytics Reviewer',
        role=UserRole.REVIEWER,
        institution='Central Library',
    )


@pytest.fixture
def administrator(db):
    return User.objects.create_superuser(
        email='analytics_admin@example.com',
        password='TestPass123!',
    )


# =============================================================================
# Activity
# =============================================================================

def _donate(donor, title, reference_price):
    return submit_book(
        donor=donor,
        title=title,
        author='Author',
        category='Other',
        condition='good',
        reference_price=reference_price,
    )


@pytest.fixture
def marketplace(donor, reader, reviewer, administrator):
    """
    A small marketplace with one book in every status.

    donor:  redeemed (1000), approved (500), rejected (200), pending (300)
    reader: approved (1500), then redeems the donor's 1000 book for 600

    Awards: 400 + 200 + 600 = 1200. Debits: 600.
    Balances: donor 600, reader 0.
    """
    sold = _donate(donor, 'Sold', 1000)
    listed = _donate(donor, 'Listed', 500)
    declined = _donate(donor, 'Declined', 200)
    _donate(donor, 'Waiting', 300)
    funding = _donate(reader, 'Funding', 1500)

    for book in (sold, listed, funding):
        review_book(reviewer=reviewer, book_id=book.id, decision=ReviewDecision.APPROVE)
    review_book(reviewer=reviewer, book_id=declined.id, decision=ReviewDecision.REJECT)

    redeem_book(redeemer=reader, book_id=sold.id)

    for user in (donor, reader):
        user.refresh_from_db()
    return {'sold': sold, 'listed': listed, 'declined': declined}


# =============================================================================
# Clients
# =============================================================================

def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def donor_client(donor):
    return _client_for(donor)


@pytest.fixture
def reviewer_client(reviewer):
    return _client_for(reviewer)


@pytest.fixture
def administrator_client(administrator):
    return _client_for(administrator)
