"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 1 administrator, 1 reviewer and 3 contributors
- Donated books in every workflow status
- The ledger entries, balances and notifications those books produce

Everything goes through the workflow services, so balances always match
the ledger afterwards (``manage.py verify_ledger`` reports no drift).
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, UserRole
from apps.books.models import BookCategory, BookCondition, ReviewDecision
from apps.books.services import submit_book, review_book, redeem_book


SAMPLE_PASSWORD = 'password123'

SAMPLE_BOOKS = [
    # (donor, title, author, category, condition, reference_price, isbn, decision)
    ('alice', 'Introduction to Algorithms', 'Thomas H. Cormen',
     BookCategory.COMPUTER_SCIENCE, BookCondition.GOOD, 1200, '9780262046305', ReviewDecision.APPROVE),
    ('alice', 'Calculus: Early Transcendentals', 'James Stewart',
     BookCategory.MATHEMATICS, BookCondition.EXCELLENT, 800, '9781285741550', ReviewDecision.APPROVE),
    ('alice', 'Old Chemistry Workbook', 'Unknown',
     BookCategory.CHEMISTRY, BookCondition.POOR, 150, '', ReviewDecision.REJECT),
    ('bob', 'Concepts of Physics', 'H. C. Verma',
     BookCategory.PHYSICS, BookCondition.FAIR, 500, '', ReviewDecision.APPROVE),
    ('bob', 'Principles of Economics', 'N. Gregory Mankiw',
     BookCategory.ECONOMICS, BookCondition.GOOD, 950, '', None),
    ('charlie', 'Campbell Biology', 'Lisa A. Urry',
     BookCategory.BIOLOGY, BookCondition.EXCELLENT, 1500, '', ReviewDecision.APPROVE),
]


class Command(BaseCommand):
    help = 'Create sample users and books for testing the API'

    @transaction.atomic
    def handle(self, *args, **options):
        if User.objects.filter(email='alice@example.com').exists():
            self.stdout.write(
                self.style.WARNING('Sample data already present. Nothing to do.')
            )
            return

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        books = self.create_books(users)
        self.redeem_books(users, books)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (administrator)')
        self.stdout.write(f'  rita@example.com / {SAMPLE_PASSWORD} (reviewer)')
        for name in ('alice', 'bob', 'charlie'):
            users[name].refresh_from_db(fields=['points_balance'])
            self.stdout.write(
                f'  {name}@example.com / {SAMPLE_PASSWORD} '
                f'(contributor, {users[name].points_balance} points)'
            )

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        admin = User.objects.filter(email='admin@example.com').first()
        if admin is None:
            admin = User.objects.create_superuser(
                email='admin@example.com',
                password='admin123',
                display_name='Admin User',
            )

        rita = User.objects.create_user(
            email='rita@example.com',
            password=SAMPLE_PASSWORD,
            display_name='Rita Reviewer',
            role=UserRole.REVIEWER,
            institution='City College Library',
        )

        contributors = {
            name: User.objects.create_user(
                email=f'{name}@example.com',
                password=SAMPLE_PASSWORD,
                display_name=display_name,
                role=UserRole.CONTRIBUTOR,
            )
            for name, display_name in [
                ('alice', 'Alice Reader'),
                ('bob', 'Bob Bookworm'),
                ('charlie', 'Charlie Scholar'),
            ]
        }

        return {'admin': admin, 'rita': rita, **contributors}

    def create_books(self, users):
        """Donate the sample books and review them."""
        self.stdout.write('  Donating and reviewing books...')

        books = {}
        for donor, title, author, category, condition, price, isbn, decision in SAMPLE_BOOKS:
            book = submit_book(
                donor=users[donor],
                title=title,
                author=author,
                category=category,
                condition=condition,
                reference_price=price,
                isbn=isbn,
            )
            if decision is not None:
                book = review_book(reviewer=users['rita'], book_id=book.id, decision=decision)
            books[title] = book

        return books

    def redeem_books(self, users, books):
        """Charlie spends the points earned from the biology donation."""
        self.stdout.write('  Redeeming books...')

        redeem_book(
            redeemer=users['charlie'],
            book_id=books['Calculus: Early Transcendentals'].id,
        )
