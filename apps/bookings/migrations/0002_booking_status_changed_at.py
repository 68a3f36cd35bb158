import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('bookings', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='booking',
            name='status_changed_at',
            field=models.DateTimeField(default=django.utils.timezone.now, help_text='When the inquiry was made or last accepted or declined.'),
        ),
        migrations.RemoveIndex(
            model_name='booking',
            name='booking_customer_updates_idx',
        ),
        migrations.AddIndex(
            model_name='booking',
            index=models.Index(fields=['customer', 'status_changed_at'], name='booking_customer_status_idx'),
        ),
    ]
