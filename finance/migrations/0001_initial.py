import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference', models.CharField(max_length=20, unique=True, verbose_name='Order ID')),
                ('customer', models.CharField(max_length=150, verbose_name='Customer')),
                ('from_iata', models.CharField(max_length=3, verbose_name='From (IATA)')),
                ('to_iata', models.CharField(max_length=3, verbose_name='To (IATA)')),
                ('pieces', models.PositiveIntegerField(default=1, verbose_name='Pieces')),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('PAID', 'Paid'), ('ESCROW', 'Escrow'), ('DELIVERED', 'Delivered'), ('RELEASED', 'Released')], default='PENDING', max_length=20, verbose_name='Status')),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, verbose_name='Price')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'ordering': ['reference'],
                'indexes': [models.Index(fields=['status'], name='order_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='Payout',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('platform_amount', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Platform share')),
                ('carrier_amount', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Carrier share')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payouts', to='finance.order', verbose_name='Order')),
            ],
            options={
                'verbose_name': 'Payout',
                'verbose_name_plural': 'Payouts',
                'ordering': ['-created_at'],
            },
        ),
    ]
