"""Data models for Active Recap."""

from .workout import WorkoutEntry, RawSession, HeartRateSample, AggregateSnapshot, EMPTY_WORKOUT
from .activity_types import ActivityType, resolve_activity

__all__ = [
    'WorkoutEntry',
    'RawSession',
    'HeartRateSample',
    'AggregateSnapshot',
    'EMPTY_WORKOUT',
    'ActivityType',
    'resolve_activity'
]
