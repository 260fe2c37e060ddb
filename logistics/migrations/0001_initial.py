import uuid
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Shipment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference', models.CharField(max_length=20, unique=True, verbose_name='Shipment ID')),
                ('carrier', models.CharField(max_length=100, verbose_name='Carrier')),
                ('tracking', models.CharField(max_length=100, verbose_name='Tracking number')),
                ('status', models.CharField(choices=[('LABEL_CREATED', 'Label Created'), ('IN_TRANSIT', 'In Transit'), ('DELIVERED', 'Delivered')], default='LABEL_CREATED', max_length=20, verbose_name='Status')),
                ('eta', models.DateField(blank=True, null=True, verbose_name='ETA')),
            ],
            options={
                'verbose_name': 'Shipment',
                'verbose_name_plural': 'Shipments',
                'ordering': ['eta'],
            },
        ),
        migrations.CreateModel(
            name='ShipmentRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('from_iata', models.CharField(max_length=3, verbose_name='From (IATA)')),
                ('to_iata', models.CharField(max_length=3, verbose_name='To (IATA)')),
                ('date', models.DateField(verbose_name='Travel date')),
                ('kg', models.PositiveIntegerField(verbose_name='Weight needed (kg)')),
                ('content_type', models.CharField(choices=[('DOCUMENTS', 'Documents'), ('BOOKS', 'Books & Printed Material'), ('CLOTHING', 'Clothing'), ('SHOES_ACCESSORIES', 'Shoes & Accessories'), ('PACKAGED_FOOD', 'Non-perishable packaged food'), ('TOYS', 'Toys (no batteries)'), ('HOME_TEXTILES', 'Home textiles'), ('ELECTRONICS_ACCESSORIES', 'Small electronics accessories (no batteries)'), ('GIFTS', 'Gifts / Souvenirs (non-hazardous)'), ('OTHER', 'Other (declare contents)')], default='DOCUMENTS', max_length=30, verbose_name='Contents type')),
                ('id_url', models.CharField(max_length=500, verbose_name='ID document')),
                ('passport_url', models.CharField(max_length=500, verbose_name='Passport')),
                ('photo_url', models.CharField(max_length=500, verbose_name='Photo (selfie)')),
                ('price_per_kg', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, verbose_name='Quoted price per kg')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='shipment_requests', to=settings.AUTH_USER_MODEL, verbose_name='Shipper')),
            ],
            options={
                'verbose_name': 'Shipment request',
                'verbose_name_plural': 'Shipment requests',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Listing',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('from_iata', models.CharField(max_length=3, verbose_name='From (IATA)')),
                ('to_iata', models.CharField(max_length=3, verbose_name='To (IATA)')),
                ('date', models.DateField(verbose_name='Travel date')),
                ('capacity_kg', models.PositiveIntegerField(verbose_name='Capacity (kg)')),
                ('price_per_kg', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, verbose_name='Price per kg')),
                ('ticket_url', models.CharField(max_length=500, verbose_name='Flight ticket')),
                ('id_url', models.CharField(max_length=500, verbose_name='ID document')),
                ('passport_url', models.CharField(max_length=500, verbose_name='Passport')),
                ('photo_url', models.CharField(max_length=500, verbose_name='Photo (selfie)')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='listings', to=settings.AUTH_USER_MODEL, verbose_name='Provider')),
            ],
            options={
                'verbose_name': 'Listing',
                'verbose_name_plural': 'Listings',
                'ordering': ['date', 'created_at'],
                'indexes': [models.Index(fields=['from_iata', 'to_iata', 'date'], name='listing_route_date_idx')],
            },
        ),
    ]
