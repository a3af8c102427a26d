"""
Population Timeline Builder

Reconstructs the flock size over time from two independent event streams:
- Flock batch acquisitions (birds added, by category)
- Mortality records (birds lost, apportioned across categories)

The timeline is a left-fold over a sorted, immutable event list. Each step
returns a new PopulationSnapshot; nothing is mutated in place.

Usage:
    from flock_management.services.population_timeline import (
        build_timeline, flock_size_at_date
    )

    timeline = build_timeline(acquisitions, deaths, fallback_profile)
    flock = flock_size_at_date(timeline, date(2024, 1, 6))
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from functools import reduce
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    """Tag for what changed the flock population."""
    ACQUISITION = 'acquisition'
    DEATH = 'death'


# Same-date ordering: acquisitions are applied before deaths
_KIND_ORDER = {EventKind.ACQUISITION: 0, EventKind.DEATH: 1}


# =============================================================================
# INPUT RECORDS
# =============================================================================

@dataclass(frozen=True)
class AcquisitionRecord:
    """A flock batch as it was acquired."""
    id: str
    batch_name: str
    acquisition_date: date
    initial_count: int
    hens_count: int = 0
    roosters_count: int = 0
    chicks_count: int = 0
    brooding_count: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class DeathRecord:
    """Birds lost from a batch on a given date."""
    batch_id: str
    date: date
    count: int
    cause: str = 'unknown'
    description: str = ''


@dataclass(frozen=True)
class FlockProfileRecord:
    """Current flock composition, used when no batch history exists."""
    hens: int = 0
    roosters: int = 0
    chicks: int = 0
    brooding: int = 0
    start_date: Optional[date] = None

    @property
    def total(self) -> int:
        return self.hens + self.roosters + self.chicks + self.brooding


# =============================================================================
# EVENTS & SNAPSHOTS
# =============================================================================

@dataclass(frozen=True)
class PopulationDelta:
    hens: int = 0
    roosters: int = 0
    chicks: int = 0
    brooding: int = 0
    total: int = 0


@dataclass(frozen=True)
class PopulationEvent:
    """
    A single population-changing event.

    The kind is fixed when the event is constructed from its source record,
    so consumers never have to inspect the shape of the payload.
    """
    date: date
    kind: EventKind
    delta: PopulationDelta
    batch_id: str
    batch_name: str = ''
    cause: str = ''

    @classmethod
    def from_acquisition(cls, record: AcquisitionRecord) -> 'PopulationEvent':
        # Initial counts, not current ones: deaths arrive as their own events
        return cls(
            date=record.acquisition_date,
            kind=EventKind.ACQUISITION,
            delta=PopulationDelta(
                hens=record.hens_count or 0,
                roosters=record.roosters_count or 0,
                chicks=record.chicks_count or 0,
                brooding=record.brooding_count or 0,
                total=record.initial_count or 0,
            ),
            batch_id=record.id,
            batch_name=record.batch_name,
        )

    @classmethod
    def from_death(cls, record: DeathRecord, batch: AcquisitionRecord) -> 'PopulationEvent':
        return cls(
            date=record.date,
            kind=EventKind.DEATH,
            delta=PopulationDelta(total=-(record.count or 0)),
            batch_id=batch.id,
            batch_name=batch.batch_name,
            cause=record.cause,
        )


@dataclass(frozen=True)
class PopulationSnapshot:
    """Cumulative flock state immediately after all events up to `date`."""
    date: date
    hens: int = 0
    roosters: int = 0
    chicks: int = 0
    brooding: int = 0
    total: int = 0

    @classmethod
    def empty(cls, on_date: date) -> 'PopulationSnapshot':
        return cls(date=on_date)

    def apply(self, event: PopulationEvent) -> 'PopulationSnapshot':
        """Return the snapshot that results from applying `event`."""
        if event.kind is EventKind.ACQUISITION:
            return PopulationSnapshot(
                date=event.date,
                hens=self.hens + event.delta.hens,
                roosters=self.roosters + event.delta.roosters,
                chicks=self.chicks + event.delta.chicks,
                brooding=self.brooding + event.delta.brooding,
                total=self.total + event.delta.total,
            )

        death_count = abs(event.delta.total)
        return PopulationSnapshot(
            date=event.date,
            hens=self._reduce_category(self.hens, death_count),
            roosters=self._reduce_category(self.roosters, death_count),
            chicks=self._reduce_category(self.chicks, death_count),
            brooding=self._reduce_category(self.brooding, death_count),
            total=max(0, self.total - death_count),
        )

    def _reduce_category(self, count: int, death_count: int) -> int:
        """Remove this category's proportional share of the deaths."""
        if self.total <= 0:
            return count
        return max(0, count - (count * death_count) // self.total)


# =============================================================================
# TIMELINE CONSTRUCTION
# =============================================================================

def population_events(
    acquisitions: Iterable[AcquisitionRecord],
    deaths: Iterable[DeathRecord],
) -> Tuple[PopulationEvent, ...]:
    """
    Merge acquisitions and deaths into one chronologically ordered sequence.

    Inactive batches contribute nothing, and deaths that reference a missing
    or inactive batch are dropped. Events sharing a date are ordered
    acquisitions first, then deaths, keeping input order within each kind.
    """
    active_batches = {batch.id: batch for batch in acquisitions if batch.is_active}

    events: List[PopulationEvent] = [
        PopulationEvent.from_acquisition(batch) for batch in active_batches.values()
    ]

    for death in deaths:
        batch = active_batches.get(death.batch_id)
        if batch is None:
            logger.debug(
                f"Skipping death record on {death.date}: batch {death.batch_id} missing or inactive"
            )
            continue
        events.append(PopulationEvent.from_death(death, batch))

    events.sort(key=lambda event: (event.date, _KIND_ORDER[event.kind]))
    return tuple(events)


def _fold_event(
    timeline: Tuple[PopulationSnapshot, ...],
    event: PopulationEvent,
) -> Tuple[PopulationSnapshot, ...]:
    current = timeline[-1] if timeline else PopulationSnapshot.empty(event.date)
    snapshot = current.apply(event)

    # Collapse same-date events into a single snapshot
    if timeline and timeline[-1].date == event.date:
        return timeline[:-1] + (snapshot,)
    return timeline + (snapshot,)


def build_timeline(
    acquisitions: Iterable[AcquisitionRecord],
    deaths: Iterable[DeathRecord],
    fallback_profile: Optional[FlockProfileRecord] = None,
    reference_date: Optional[date] = None,
) -> Tuple[PopulationSnapshot, ...]:
    """
    Build the cumulative population history.

    Args:
        acquisitions: Flock batch acquisition records
        deaths: Mortality records
        fallback_profile: Current flock profile, used only if there are no events
        reference_date: Date for the fallback snapshot when the profile has
            no start date (defaults to today)

    Returns:
        Date-ascending tuple of snapshots, one per distinct event date
    """
    events = population_events(acquisitions, deaths)
    timeline = reduce(_fold_event, events, ())

    if not timeline and fallback_profile is not None:
        snapshot_date = fallback_profile.start_date or reference_date or date.today()
        timeline = (
            PopulationSnapshot(
                date=snapshot_date,
                hens=fallback_profile.hens or 0,
                roosters=fallback_profile.roosters or 0,
                chicks=fallback_profile.chicks or 0,
                brooding=fallback_profile.brooding or 0,
                total=fallback_profile.total,
            ),
        )
        logger.debug(f"No flock events, using profile baseline of {fallback_profile.total} birds")

    return timeline


# =============================================================================
# QUERIES
# =============================================================================

def flock_size_at_date(
    timeline: Tuple[PopulationSnapshot, ...],
    target_date: date,
) -> PopulationSnapshot:
    """
    Most recent snapshot on or before `target_date`.

    Falls back to the earliest snapshot when the date precedes the whole
    timeline, and to an all-zero snapshot when the timeline is empty.
    """
    for snapshot in reversed(timeline):
        if snapshot.date <= target_date:
            return snapshot

    if timeline:
        return timeline[0]
    return PopulationSnapshot.empty(target_date)


def changes_during(
    timeline: Tuple[PopulationSnapshot, ...],
    start_date: date,
    end_date: date,
) -> List[PopulationSnapshot]:
    """Snapshots dated strictly after `start_date` and on or before `end_date`."""
    return [
        snapshot for snapshot in timeline
        if start_date < snapshot.date <= end_date
    ]
