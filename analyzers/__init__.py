"""Workout aggregation and scoring."""

from .date_range import resolve_date_range, year_progress, YearProgress
from .intensity import intensity_score
from .heart_rate import HeartRateEnricher
from .aggregate_stats import AggregateStatsStore
from .workout_ingestion import WorkoutIngestionPipeline
from .workout_recap import WorkoutRecap

__all__ = [
    'resolve_date_range',
    'year_progress',
    'YearProgress',
    'intensity_score',
    'HeartRateEnricher',
    'AggregateStatsStore',
    'WorkoutIngestionPipeline',
    'WorkoutRecap'
]
