"""
Feed Period Allocator

Attributes the cost of each depleted feed bag to the birds that ate it.

When the flock size is constant while a bag is open, the cost per bird per
day is simply cost / days / birds. When the flock changes one or more times
during the bag's life, the bag is split at every change and cost is
allocated by bird-days: per-bird consumption is held constant across the
whole bag, and each sub-period's cost and quantity follow from how many
bird-days it contains.

Example:
    10 birds, $100 bag open for 10 days, 5 birds die on day 5.
    Bird-days: 5 x 10 + 5 x 5 = 75
    Cost per bird per day: 100 / 75 = $1.333 (same for both sub-periods)
    Sub-period costs: $66.67 + $33.33 = $100.00
"""

import logging
import math
from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from flock_management.services.population_timeline import (
    EventKind,
    PopulationEvent,
    PopulationSnapshot,
    changes_during,
    flock_size_at_date,
)

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30
SECONDS_PER_DAY = 60 * 60 * 24


@dataclass(frozen=True)
class FeedBagRecord:
    """A purchased feed bag. Only depleted bags can be allocated."""
    id: str
    brand: str
    feed_type: str
    opened_date: date
    quantity: Optional[float] = 0.0
    unit: str = 'kg'
    price_per_unit: Optional[float] = 0.0
    total_cost: Optional[float] = None
    depleted_date: Optional[date] = None

    @property
    def is_depleted(self) -> bool:
        return self.depleted_date is not None

    @property
    def resolved_quantity(self) -> float:
        return float(self.quantity or 0)

    @property
    def resolved_total_cost(self) -> float:
        """Recorded total cost, or quantity x price when no total was recorded."""
        if self.total_cost is not None:
            return float(self.total_cost)
        return self.resolved_quantity * float(self.price_per_unit or 0)


@dataclass(frozen=True)
class FlockChange:
    """Human-readable description of a population change inside a feed period."""
    date: date
    change_type: EventKind
    change_amount: int
    previous_count: int
    new_count: int
    description: str
    batch_name: Optional[str] = None


@dataclass(frozen=True)
class FeedPeriod:
    """
    The interval a feed bag was in use, with its per-bird cost figures.

    Sub-periods share this shape but never carry sub-periods of their own.
    """
    feed_bag: FeedBagRecord
    start_date: date
    end_date: date
    duration: int
    total_cost: float
    total_quantity: float
    flock_size: PopulationSnapshot
    feed_per_bird_per_day: float
    cost_per_bird_per_day: float
    cost_per_bird_per_month: float
    has_population_changes: bool = False
    flock_changes: Tuple[FlockChange, ...] = ()
    sub_periods: Tuple['FeedPeriod', ...] = ()


def days_between(start, end) -> int:
    """Whole days from `start` to `end`, rounded up."""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def allocate_feed_periods(
    feed_bags: Iterable[FeedBagRecord],
    timeline: Sequence[PopulationSnapshot],
    events: Sequence[PopulationEvent] = (),
) -> List[FeedPeriod]:
    """
    Allocate every depleted feed bag against the population timeline.

    Args:
        feed_bags: Feed bag records; open bags are skipped
        timeline: Population timeline from build_timeline()
        events: Population events, used to describe flock changes

    Returns:
        Feed periods sorted most recent first
    """
    timeline = tuple(timeline)
    periods = []
    skipped = 0

    for bag in feed_bags:
        if not bag.is_depleted:
            skipped += 1
            continue

        changes = changes_during(timeline, bag.opened_date, bag.depleted_date)
        if changes:
            periods.append(_allocate_with_changes(bag, timeline, changes, events))
        else:
            periods.append(_allocate_constant(bag, timeline))

    if skipped:
        logger.debug(f"Skipped {skipped} feed bag(s) still in use")

    periods.sort(key=lambda period: period.start_date, reverse=True)
    return periods


def _allocate_constant(bag: FeedBagRecord, timeline: Tuple[PopulationSnapshot, ...]) -> FeedPeriod:
    """Flock size constant for the whole bag."""
    duration = days_between(bag.opened_date, bag.depleted_date)
    flock_size = flock_size_at_date(timeline, bag.opened_date)
    total_cost = bag.resolved_total_cost
    total_quantity = bag.resolved_quantity

    if flock_size.total > 0 and duration > 0:
        cost_per_bird_per_day = total_cost / duration / flock_size.total
        feed_per_bird_per_day = total_quantity / duration / flock_size.total
    else:
        cost_per_bird_per_day = 0.0
        feed_per_bird_per_day = 0.0

    return FeedPeriod(
        feed_bag=bag,
        start_date=bag.opened_date,
        end_date=bag.depleted_date,
        duration=duration,
        total_cost=total_cost,
        total_quantity=total_quantity,
        flock_size=flock_size,
        feed_per_bird_per_day=feed_per_bird_per_day,
        cost_per_bird_per_day=cost_per_bird_per_day,
        cost_per_bird_per_month=cost_per_bird_per_day * DAYS_PER_MONTH,
        has_population_changes=False,
    )


def _allocate_with_changes(
    bag: FeedBagRecord,
    timeline: Tuple[PopulationSnapshot, ...],
    changes: List[PopulationSnapshot],
    events: Sequence[PopulationEvent],
) -> FeedPeriod:
    """Split the bag at every population change and allocate by bird-days."""
    total_cost = bag.resolved_total_cost
    total_quantity = bag.resolved_quantity

    boundaries = sorted({bag.opened_date, bag.depleted_date, *(change.date for change in changes)})

    segments = []
    for sub_start, sub_end in zip(boundaries, boundaries[1:]):
        sub_duration = days_between(sub_start, sub_end)
        if sub_duration <= 0:
            continue
        sub_flock = flock_size_at_date(timeline, sub_start)
        segments.append((sub_start, sub_end, sub_duration, sub_flock, sub_flock.total * sub_duration))

    total_bird_days = sum(segment[4] for segment in segments)

    if total_bird_days > 0:
        feed_per_bird_per_day = total_quantity / total_bird_days
        cost_per_bird_per_day = total_cost / total_bird_days
    else:
        feed_per_bird_per_day = 0.0
        cost_per_bird_per_day = 0.0
    cost_per_bird_per_month = cost_per_bird_per_day * DAYS_PER_MONTH

    sub_periods = []
    for sub_start, sub_end, sub_duration, sub_flock, bird_days in segments:
        feed_consumed = bird_days * feed_per_bird_per_day
        sub_periods.append(FeedPeriod(
            feed_bag=replace(bag, quantity=feed_consumed),
            start_date=sub_start,
            end_date=sub_end,
            duration=sub_duration,
            total_cost=bird_days * cost_per_bird_per_day,
            total_quantity=feed_consumed,
            flock_size=sub_flock,
            feed_per_bird_per_day=feed_per_bird_per_day,
            cost_per_bird_per_day=cost_per_bird_per_day,
            cost_per_bird_per_month=cost_per_bird_per_month,
            has_population_changes=False,
        ))

    opening_flock = flock_size_at_date(timeline, bag.opened_date)

    return FeedPeriod(
        feed_bag=bag,
        start_date=bag.opened_date,
        end_date=bag.depleted_date,
        duration=days_between(bag.opened_date, bag.depleted_date),
        total_cost=total_cost,
        total_quantity=total_quantity,
        flock_size=opening_flock,
        feed_per_bird_per_day=feed_per_bird_per_day,
        cost_per_bird_per_day=cost_per_bird_per_day,
        cost_per_bird_per_month=cost_per_bird_per_month,
        has_population_changes=True,
        flock_changes=describe_flock_changes(changes, opening_flock, events),
        sub_periods=tuple(sub_periods),
    )


def describe_flock_changes(
    changes: List[PopulationSnapshot],
    opening_flock: PopulationSnapshot,
    events: Sequence[PopulationEvent],
) -> Tuple[FlockChange, ...]:
    """
    Describe each population change by matching its date back to the events.

    When an acquisition and a death share a date, the acquisition describes
    the change.
    """
    described = []
    previous = opening_flock

    for change in changes:
        on_date = [event for event in events if event.date == change.date]
        acquisition = next((e for e in on_date if e.kind is EventKind.ACQUISITION), None)
        death = next((e for e in on_date if e.kind is EventKind.DEATH), None)

        if acquisition is not None:
            amount = acquisition.delta.total
            described.append(FlockChange(
                date=change.date,
                change_type=EventKind.ACQUISITION,
                change_amount=amount,
                previous_count=previous.total,
                new_count=change.total,
                description=f'Added {amount} birds from batch "{acquisition.batch_name}"',
                batch_name=acquisition.batch_name,
            ))
        elif death is not None:
            lost = abs(death.delta.total)
            description = f'Lost {lost} birds - {death.cause}'
            if death.batch_name:
                description += f' (from batch "{death.batch_name}")'
            described.append(FlockChange(
                date=change.date,
                change_type=EventKind.DEATH,
                change_amount=-lost,
                previous_count=previous.total,
                new_count=change.total,
                description=description,
                batch_name=death.batch_name or None,
            ))
        else:
            difference = change.total - previous.total
            described.append(FlockChange(
                date=change.date,
                change_type=EventKind.ACQUISITION if difference >= 0 else EventKind.DEATH,
                change_amount=difference,
                previous_count=previous.total,
                new_count=change.total,
                description='Flock change',
            ))

        previous = change

    return tuple(described)
