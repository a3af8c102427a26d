"""
Flock management services module
"""

from .population_timeline import (
    AcquisitionRecord,
    DeathRecord,
    EventKind,
    FlockProfileRecord,
    PopulationEvent,
    PopulationSnapshot,
    build_timeline,
    changes_during,
    flock_size_at_date,
    population_events,
)

__all__ = [
    'AcquisitionRecord',
    'DeathRecord',
    'EventKind',
    'FlockProfileRecord',
    'PopulationEvent',
    'PopulationSnapshot',
    'build_timeline',
    'changes_during',
    'flock_size_at_date',
    'population_events',
]
