"""
Flock Management Signals

Keeps each batch's current_count in step with its mortality records.

The population timeline is rebuilt from initial counts plus death events,
so current_count is only used for display and validation. It is recomputed
from the full mortality history on every save and delete.
"""

import logging

from django.db.models import Sum
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


def sync_batch_current_count(batch):
    """Recalculate current_count = initial_count - recorded deaths."""
    recorded = batch.mortality_records.aggregate(total=Sum('count'))['total'] or 0
    current_count = max(0, batch.initial_count - recorded)

    if batch.current_count != current_count:
        batch.current_count = current_count
        batch.save(update_fields=['current_count', 'updated_at'])
        logger.debug(f"Batch {batch.batch_name} current_count updated to {current_count}")


@receiver(post_save, sender='flock_management.MortalityRecord')
def mortality_saved_update_batch(sender, instance, **kwargs):
    sync_batch_current_count(instance.batch)


@receiver(post_delete, sender='flock_management.MortalityRecord')
def mortality_deleted_update_batch(sender, instance, **kwargs):
    from flock_management.models import FlockBatch

    # The batch itself may be the thing being deleted (cascade)
    batch = FlockBatch.objects.filter(pk=instance.batch_id).first()
    if batch is None:
        return
    sync_batch_current_count(batch)
