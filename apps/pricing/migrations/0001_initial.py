# Generated manually for the pricing app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PriceEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('effective_date', models.DateField(unique=True)),
                ('fresh_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('burnt_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('long_top_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'price_entries',
                'ordering': ['-effective_date'],
            },
        ),
        migrations.CreateModel(
            name='PriceSetting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('fresh_price', models.DecimalField(decimal_places=2, default=Decimal('1200'), max_digits=12)),
                ('burnt_price', models.DecimalField(decimal_places=2, default=Decimal('1000'), max_digits=12)),
                ('long_top_price', models.DecimalField(decimal_places=2, default=Decimal('1100'), max_digits=12)),
                ('quotas', models.JSONField(blank=True, default=list)),
            ],
            options={
                'db_table': 'price_settings',
            },
        ),
    ]
