# Generated manually for the book exchange ledger app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('books', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='LedgerEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('kind', models.CharField(choices=[('award', 'Award'), ('debit', 'Debit')], max_length=10)),
                ('amount', models.PositiveIntegerField()),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed'), ('failed', 'Failed')], default='pending', max_length=10)),
                ('description', models.CharField(max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('book', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to='books.book')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'ledger_entries',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'ledger entries',
                'indexes': [
                    models.Index(fields=['user', 'created_at'], name='ledger_user_created_idx'),
                    models.Index(fields=['book'], name='ledger_book_idx'),
                    models.Index(fields=['kind', 'status'], name='ledger_kind_status_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(amount__gte=1), name='ledger_amount_positive'),
                ],
            },
        ),
    ]
