"""
Flock Management Models

Handles:
- Flock profile (current composition, used as a baseline when no batches exist)
- Flock batches (birds grouped by acquisition date)
- Mortality records (birds lost per batch)

Batches and mortality records are the two event streams the population
timeline is rebuilt from.
"""

import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


# =============================================================================
# FLOCK PROFILE
# =============================================================================

class FlockProfile(models.Model):
    """
    Current flock composition for a user.

    Only consulted for feed costing when no batch history has been recorded.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='flock_profile'
    )

    hens = models.PositiveIntegerField(default=0)
    roosters = models.PositiveIntegerField(default=0)
    chicks = models.PositiveIntegerField(default=0)
    brooding = models.PositiveIntegerField(
        default=0,
        help_text="Hens currently brooding (not laying)"
    )
    breed_types = models.JSONField(
        default=list,
        blank=True,
        help_text="Breeds kept in the flock (JSON array)"
    )
    flock_start_date = models.DateField(
        null=True,
        blank=True,
        help_text="Date the flock was started"
    )
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'flock_profiles'

    def __str__(self):
        return f"{self.user} - {self.total_birds} birds"

    @property
    def total_birds(self):
        return self.hens + self.roosters + self.chicks + self.brooding


# =============================================================================
# FLOCK BATCH
# =============================================================================

class FlockBatch(models.Model):
    """
    A group of birds acquired together.

    `initial_count` and the category counts describe the batch as it arrived
    and are never reduced. `current_count` is kept in sync with mortality
    records by signals.
    """

    BATCH_TYPE_CHOICES = [
        ('hens', 'Hens'),
        ('roosters', 'Roosters'),
        ('chicks', 'Chicks'),
        ('mixed', 'Mixed'),
    ]

    AGE_CHOICES = [
        ('chick', 'Chick'),
        ('juvenile', 'Juvenile'),
        ('adult', 'Adult'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='flock_batches'
    )

    # Identification
    batch_name = models.CharField(max_length=255)
    breed = models.CharField(max_length=255, blank=True)
    batch_type = models.CharField(max_length=20, choices=BATCH_TYPE_CHOICES, default='mixed')
    age_at_acquisition = models.CharField(max_length=20, choices=AGE_CHOICES, default='adult')
    source = models.CharField(
        max_length=255,
        blank=True,
        help_text="Hatchery, farm, store, etc."
    )

    # Acquisition
    acquisition_date = models.DateField(db_index=True)
    initial_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of birds at acquisition (defaults to the sum of category counts)"
    )
    hens_count = models.PositiveIntegerField(default=0)
    roosters_count = models.PositiveIntegerField(default=0)
    chicks_count = models.PositiveIntegerField(default=0)
    brooding_count = models.PositiveIntegerField(default=0)

    # Current status
    current_count = models.PositiveIntegerField(
        default=0,
        help_text="Living birds (initial count less recorded deaths)"
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Inactive batches are ignored by feed costing"
    )

    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'flock_batches'
        ordering = ['-acquisition_date', 'batch_name']
        verbose_name_plural = 'Flock Batches'
        indexes = [
            models.Index(fields=['user', 'is_active'], name='flock_batch_user_active_idx'),
            models.Index(fields=['acquisition_date'], name='flock_batch_acq_date_idx'),
        ]

    def __str__(self):
        return f"{self.batch_name} ({self.acquisition_date})"

    @property
    def category_total(self):
        return self.hens_count + self.roosters_count + self.chicks_count + self.brooding_count

    def save(self, *args, **kwargs):
        if not self.initial_count:
            self.initial_count = self.category_total

        # Set current count to initial count on first save
        if self._state.adding and not self.current_count:
            self.current_count = self.initial_count

        super().save(*args, **kwargs)

    def clean(self):
        """Validate business logic"""
        from django.core.exceptions import ValidationError

        errors = {}

        initial = self.initial_count or self.category_total
        if initial <= 0:
            errors['initial_count'] = 'A batch must contain at least one bird'
        elif self.category_total > initial:
            errors['initial_count'] = (
                f'Category counts ({self.category_total}) exceed initial count ({initial})'
            )

        if self.current_count and self.current_count > initial:
            errors['current_count'] = (
                f'Current count ({self.current_count}) cannot exceed initial count ({initial})'
            )

        if self.acquisition_date and self.acquisition_date > timezone.now().date():
            errors['acquisition_date'] = 'Acquisition date cannot be in the future'

        if errors:
            raise ValidationError(errors)


# =============================================================================
# MORTALITY RECORD
# =============================================================================

class MortalityRecord(models.Model):
    """Birds lost from a batch on a given date."""

    CAUSE_CHOICES = [
        ('predator', 'Predator'),
        ('disease', 'Disease'),
        ('age', 'Old Age'),
        ('injury', 'Injury'),
        ('unknown', 'Unknown'),
        ('culled', 'Culled'),
        ('other', 'Other'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='mortality_records'
    )
    batch = models.ForeignKey(
        FlockBatch,
        on_delete=models.CASCADE,
        related_name='mortality_records'
    )

    date = models.DateField(db_index=True)
    count = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Number of birds that died"
    )
    cause = models.CharField(max_length=20, choices=CAUSE_CHOICES, default='unknown')
    description = models.TextField(blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'mortality_records'
        ordering = ['-date']
        indexes = [
            models.Index(fields=['user', 'date'], name='mortality_user_date_idx'),
            models.Index(fields=['batch', 'date'], name='mortality_batch_date_idx'),
            models.Index(fields=['cause'], name='mortality_cause_idx'),
        ]

    def __str__(self):
        return f"{self.batch.batch_name} - {self.date} ({self.count} birds)"

    def clean(self):
        """Validate business logic"""
        from django.core.exceptions import ValidationError

        errors = {}

        if self.date and self.date > timezone.now().date():
            errors['date'] = 'Date cannot be in the future'

        if self.batch_id:
            if self.date and self.date < self.batch.acquisition_date:
                errors['date'] = (
                    f'Date cannot be before batch acquisition ({self.batch.acquisition_date})'
                )

            # Birds still alive, not counting this record if it is being edited
            recorded = self.batch.mortality_records.exclude(pk=self.pk).aggregate(
                total=models.Sum('count')
            )['total'] or 0
            alive = max(0, self.batch.initial_count - recorded)
            if self.count and self.count > alive:
                errors['count'] = f'Only {alive} birds remain in batch {self.batch.batch_name}'

        if errors:
            raise ValidationError(errors)
