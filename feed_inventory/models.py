"""
Feed Inventory Models

Tracks feed bags from purchase to depletion.

Models:
    - FeedBag: A purchased bag of feed, opened on one date and depleted on
      another. Depleted bags are the input to feed cost allocation.
"""

import uuid
from decimal import Decimal, ROUND_HALF_UP
from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator
from django.core.exceptions import ValidationError


class FeedBag(models.Model):
    """
    A bag (or lot) of feed.

    Created on purchase, marked depleted once when it runs out, otherwise
    left unchanged.
    """

    UNIT_CHOICES = [
        ('kg', 'Kilograms'),
        ('lbs', 'Pounds'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='feed_bags',
        help_text="Owner of this feed record"
    )

    # Feed Information
    brand = models.CharField(max_length=100, help_text="Brand of the feed")
    feed_type = models.CharField(max_length=100, help_text="Type of feed (e.g., 'Layer Pellets')")
    batch_number = models.CharField(max_length=50, blank=True, help_text="Manufacturer batch/lot number")
    description = models.TextField(blank=True)

    # Quantity and Pricing
    quantity = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        default=Decimal('0.00'),
        help_text="Quantity in the bag"
    )
    unit = models.CharField(max_length=3, choices=UNIT_CHOICES, default='kg')
    price_per_unit = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        default=Decimal('0.00'),
        help_text="Price per kg/lb"
    )
    total_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        default=Decimal('0.00'),
        help_text="Total price paid (defaults to quantity × price_per_unit)"
    )

    # Lifecycle
    opened_date = models.DateField(help_text="Date the bag was opened")
    depleted_date = models.DateField(null=True, blank=True, help_text="Date the bag ran out")

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-opened_date', '-created_at']
        verbose_name = 'Feed Bag'
        verbose_name_plural = 'Feed Bags'
        indexes = [
            models.Index(fields=['user', 'opened_date'], name='feed_bag_user_opened_idx'),
            models.Index(fields=['user', 'depleted_date'], name='feed_bag_user_depleted_idx'),
        ]

    def __str__(self):
        return f"{self.brand} {self.feed_type} ({self.opened_date})"

    @property
    def is_depleted(self):
        return self.depleted_date is not None

    def save(self, *args, **kwargs):
        """Derive total cost from the unit price when no total was given."""
        if not self.total_cost and self.price_per_unit:
            total = Decimal(str(self.quantity)) * Decimal(str(self.price_per_unit))
            self.total_cost = total.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

        super().save(*args, **kwargs)

    def clean(self):
        """Validate feed bag data."""
        errors = {}

        if self.depleted_date and self.opened_date and self.depleted_date < self.opened_date:
            errors['depleted_date'] = "Depleted date cannot be before opened date"

        if errors:
            raise ValidationError(errors)

    def mark_depleted(self, depleted_date):
        """
        Record the date the bag ran out.

        Args:
            depleted_date: Date the last of the feed was used
        """
        if self.is_depleted:
            raise ValidationError({'depleted_date': f"Bag was already depleted on {self.depleted_date}"})

        self.depleted_date = depleted_date
        self.full_clean()
        self.save(update_fields=['depleted_date', 'updated_at'])
