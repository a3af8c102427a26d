# Generated manually for flock profiles, batches and mortality records
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
            name='FlockProfile',
            fields=[
                ('id', models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ('hens', models.PositiveIntegerField(default=0)),
                ('roosters', models.PositiveIntegerField(default=0)),
                ('chicks', models.PositiveIntegerField(default=0)),
                ('brooding', models.PositiveIntegerField(default=0, help_text='Hens currently brooding (not laying)')),
                ('breed_types', models.JSONField(blank=True, default=list, help_text='Breeds kept in the flock (JSON array)')),
                ('flock_start_date', models.DateField(blank=True, null=True, help_text='Date the flock was started')),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='flock_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'flock_profiles',
            },
        ),
        migrations.CreateModel(
            name='FlockBatch',
            fields=[
                ('id', models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ('batch_name', models.CharField(max_length=255)),
                ('breed', models.CharField(blank=True, max_length=255)),
                ('batch_type', models.CharField(choices=[('hens', 'Hens'), ('roosters', 'Roosters'), ('chicks', 'Chicks'), ('mixed', 'Mixed')], default='mixed', max_length=20)),
                ('age_at_acquisition', models.CharField(choices=[('chick', 'Chick'), ('juvenile', 'Juvenile'), ('adult', 'Adult')], default='adult', max_length=20)),
                ('source', models.CharField(blank=True, help_text='Hatchery, farm, store, etc.', max_length=255)),
                ('acquisition_date', models.DateField(db_index=True)),
                ('initial_count', models.PositiveIntegerField(default=0, help_text='Number of birds at acquisition (defaults to the sum of category counts)')),
                ('hens_count', models.PositiveIntegerField(default=0)),
                ('roosters_count', models.PositiveIntegerField(default=0)),
                ('chicks_count', models.PositiveIntegerField(default=0)),
                ('brooding_count', models.PositiveIntegerField(default=0)),
                ('current_count', models.PositiveIntegerField(default=0, help_text='Living birds (initial count less recorded deaths)')),
                ('is_active', models.BooleanField(default=True, help_text='Inactive batches are ignored by feed costing')),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='flock_batches', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'flock_batches',
                'ordering': ['-acquisition_date', 'batch_name'],
                'verbose_name_plural': 'Flock Batches',
            },
        ),
        migrations.CreateModel(
            name='MortalityRecord',
            fields=[
                ('id', models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ('date', models.DateField(db_index=True)),
                ('count', models.PositiveIntegerField(help_text='Number of birds that died', validators=[django.core.validators.MinValueValidator(1)])),
                ('cause', models.CharField(choices=[('predator', 'Predator'), ('disease', 'Disease'), ('age', 'Old Age'), ('injury', 'Injury'), ('unknown', 'Unknown'), ('culled', 'Culled'), ('other', 'Other')], default='unknown', max_length=20)),
                ('description', models.TextField(blank=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='mortality_records', to='flock_management.flockbatch')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='mortality_records', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'mortality_records',
                'ordering': ['-date'],
            },
        ),
        migrations.AddIndex(
            model_name='flockbatch',
            index=models.Index(fields=['user', 'is_active'], name='flock_batch_user_active_idx'),
        ),
        migrations.AddIndex(
            model_name='flockbatch',
            index=models.Index(fields=['acquisition_date'], name='flock_batch_acq_date_idx'),
        ),
        migrations.AddIndex(
            model_name='mortalityrecord',
            index=models.Index(fields=['user', 'date'], name='mortality_user_date_idx'),
        ),
        migrations.AddIndex(
            model_name='mortalityrecord',
            index=models.Index(fields=['batch', 'date'], name='mortality_batch_date_idx'),
        ),
        migrations.AddIndex(
            model_name='mortalityrecord',
            index=models.Index(fields=['cause'], name='mortality_cause_idx'),
        ),
    ]
