import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('venues', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('customer_name', models.CharField(max_length=255)),
                ('customer_email', models.EmailField(max_length=254)),
                ('customer_phone', models.CharField(blank=True, max_length=20)),
                ('event_date', models.DateField()),
                ('event_type', models.CharField(blank=True, max_length=100)),
                ('guest_count', models.PositiveIntegerField()),
                ('amount', models.DecimalField(decimal_places=2, help_text='Displayed price of the venue at inquiry time.', max_digits=12)),
                ('payment_amount', models.DecimalField(blank=True, decimal_places=2, help_text='Amount charged: base price plus GST, rounded to whole rupees.', max_digits=12, null=True)),
                ('special_requirements', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('payment_status', models.CharField(choices=[('not_required', 'Not required'), ('pending', 'Pending'), ('completed', 'Completed'), ('failed', 'Failed')], default='not_required', max_length=20)),
                ('razorpay_order_id', models.CharField(blank=True, max_length=64)),
                ('razorpay_payment_id', models.CharField(blank=True, max_length=64)),
                ('payment_completed_at', models.DateTimeField(blank=True, null=True)),
                ('payment_error_description', models.TextField(blank=True)),
                ('customer_acknowledged_at', models.DateTimeField(blank=True, help_text='When the customer last marked their status updates as seen.', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bookings', to=settings.AUTH_USER_MODEL)),
                ('venue', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bookings', to='venues.venue')),
            ],
            options={
                'verbose_name': 'Booking',
                'verbose_name_plural': 'Bookings',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['venue', 'event_date', 'status'], name='booking_venue_date_status_idx'),
                    models.Index(fields=['customer', 'status', 'updated_at'], name='booking_customer_updates_idx'),
                    models.Index(fields=['razorpay_order_id'], name='booking_razorpay_order_idx'),
                ],
            },
        ),
    ]
