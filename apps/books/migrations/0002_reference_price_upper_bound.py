# Generated manually for the book exchange books app

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('books', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='book',
            name='reference_price',
            field=models.PositiveIntegerField(
                validators=[MinValueValidator(1), MaxValueValidator(1000000)]
            ),
        ),
    ]
