# Generated manually for the book exchange books app

import uuid
import apps.books.models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Book',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('author', models.CharField(max_length=100)),
                ('isbn', models.CharField(blank=True, max_length=32, validators=[apps.books.models.validate_isbn])),
                ('category', models.CharField(choices=[('Mathematics', 'Mathematics'), ('Science', 'Science'), ('English', 'English'), ('History', 'History'), ('Geography', 'Geography'), ('Computer Science', 'Computer Science'), ('Physics', 'Physics'), ('Chemistry', 'Chemistry'), ('Biology', 'Biology'), ('Economics', 'Economics'), ('Other', 'Other')], max_length=32)),
                ('condition', models.CharField(choices=[('excellent', 'Excellent'), ('good', 'Good'), ('fair', 'Fair'), ('poor', 'Poor')], max_length=16)),
                ('description', models.TextField(blank=True, max_length=1000)),
                ('images', models.JSONField(blank=True, default=list)),
                ('reference_price', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('redemption_price', models.PositiveIntegerField()),
                ('status', models.CharField(choices=[('pending', 'Pending review'), ('approved', 'Approved'), ('rejected', 'Rejected'), ('redeemed', 'Redeemed')], default='pending', max_length=16)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('redeemed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('donor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='donated_books', to=settings.AUTH_USER_MODEL)),
                ('redeemer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='redeemed_books', to=settings.AUTH_USER_MODEL)),
                ('reviewer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='reviewed_books', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'books',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='books_status_created_idx'),
                    models.Index(fields=['donor', 'created_at'], name='books_donor_created_idx'),
                    models.Index(fields=['category'], name='books_category_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(reference_price__gte=1), name='books_reference_price_positive'),
                    models.CheckConstraint(condition=~models.Q(status='redeemed') | models.Q(redeemer__isnull=False), name='books_redeemed_has_redeemer'),
                ],
            },
        ),
    ]
