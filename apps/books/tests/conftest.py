import math

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.books.models import BookCategory, BookCondition, ReviewDecision
from apps.books.services import submit_book, review_book


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def contributor(db):
    """Create and return the donating contributor."""
    return User.objects.create_user(
        email='donor@example.com',
        password='TestPass123!',
        display_name='Donor',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def other_contributor(db):
    """Create and return a second contributor who redeems books."""
    return User.objects.create_user(
        email='reader@example.com',
        password='TestPass123!',
        display_name='Reader',
        role=UserRole.CONTRIBUTOR,
    )


@pytest.fixture
def reviewer(db):
    """Create and return an institutional reviewer."""
    return User.objects.create_user(
        email='reviewer@example.com',
        password='TestPass123!',
        display_name='Reviewer',
        role=UserRole.REVIEWER,
        institution='Central Library',
    )


@pytest.fixture
def administrator(db):
    """Create and return a platform administrator."""
    return User.objects.create_superuser(
        email='administrator@example.com',
        password='TestPass123!',
        display_name='Administrator',
    )


@pytest.fixture
def book_data():
    """Valid submission fields for a book with reference price 1000."""
    return {
        'title': 'Introduction to Algorithms',
        'author': 'Thomas H. Cormen',
        'category': BookCategory.COMPUTER_SCIENCE,
        'condition': BookCondition.GOOD,
        'reference_price': 1000,
        'isbn': '978-0-262-04630-5',
        'description': 'Fourth edition, light pencil notes.',
        'images': ['https://example.com/covers/clrs.jpg'],
    }


@pytest.fixture
def pending_book(contributor, book_data):
    """A book submitted by the contributor and awaiting review."""
    return submit_book(donor=contributor, **book_data)


@pytest.fixture
def approved_book(pending_book, reviewer):
    """The contributor's book, approved (donor now holds 400 points)."""
    return review_book(
        reviewer=reviewer,
        book_id=pending_book.id,
        decision=ReviewDecision.APPROVE,
    )


@pytest.fixture
def fund(reviewer):
    """
    Give a contributor exactly ``points`` through the normal workflow.

    Donates a book whose award floors to ``points`` and has it approved,
    so the ledger and the cached balance stay consistent.
    """
    def _fund(user, points):
        book = submit_book(
            donor=user,
            title=f'Funding book for {user.email}',
            author='Various',
            category=BookCategory.OTHER,
            condition=BookCondition.FAIR,
            reference_price=math.ceil(points * 5 / 2),
        )
        review_book(reviewer=reviewer, book_id=book.id, decision=ReviewDecision.APPROVE)
        user.refresh_from_db()
        return user
    return _fund


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def contributor_client(contributor):
    return _client_for(contributor)


@pytest.fixture
def other_contributor_client(other_contributor):
    return _client_for(other_contributor)


@pytest.fixture
def reviewer_client(reviewer):
    return _client_for(reviewer)


@pytest.fixture
def administrator_client(administrator):
    return _client_for(administrator)
