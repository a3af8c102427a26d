# Generated manually for feed bags
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import uuid
import django.core.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FeedBag',
            fields=[
                ('id', models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ('brand', models.CharField(help_text='Brand of the feed', max_length=100)),
                ('feed_type', models.CharField(help_text="Type of feed (e.g., 'Layer Pellets')", max_length=100)),
                ('batch_number', models.CharField(blank=True, help_text='Manufacturer batch/lot number', max_length=50)),
                ('description', models.TextField(blank=True)),
                ('quantity', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Quantity in the bag', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('unit', models.CharField(choices=[('kg', 'Kilograms'), ('lbs', 'Pounds')], default='kg', max_length=3)),
                ('price_per_unit', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Price per kg/lb', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('total_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Total price paid (defaults to quantity × price_per_unit)', max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('opened_date', models.DateField(help_text='Date the bag was opened')),
                ('depleted_date', models.DateField(blank=True, help_text='Date the bag ran out', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(help_text='Owner of this feed record', on_delete=django.db.models.deletion.CASCADE, related_name='feed_bags', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Feed Bag',
                'verbose_name_plural': 'Feed Bags',
                'ordering': ['-opened_date', '-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='feedbag',
            index=models.Index(fields=['user', 'opened_date'], name='feed_bag_user_opened_idx'),
        ),
        migrations.AddIndex(
            model_name='feedbag',
            index=models.Index(fields=['user', 'depleted_date'], name='feed_bag_user_depleted_idx'),
        ),
    ]
