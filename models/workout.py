"""Data models for workout recap aggregation."""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from datetime import datetime


@dataclass(frozen=True)
class HeartRateSample:
    """A single heart rate reading."""

    timestamp: datetime
    bpm: float


@dataclass
class RawSession:
    """Workout session as supplied by a health data provider."""

    activity_type: str
    start_time: datetime
    end_time: datetime
    duration_seconds: float
    energy_samples: List[float] = field(default_factory=list)  # active energy, kcal
    source_id: Optional[str] = None

    @property
    def duration_minutes(self) -> float:
        """Get duration in minutes."""
        return self.duration_seconds / 60


@dataclass(frozen=True)
class WorkoutEntry:
    """A fully enriched and scored workout session."""

    activity_type: str
    icon: str
    start_time: datetime
    duration_minutes: float
    calories_burned: int = 0
    average_heart_rate: int = 0
    peak_heart_rate: int = 0
    intensity_score: float = 0.0

    def __post_init__(self):
        for name in ('duration_minutes', 'calories_burned', 'average_heart_rate',
                     'peak_heart_rate', 'intensity_score'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @property
    def is_empty(self) -> bool:
        """Check if this is the placeholder entry used before any ingestion."""
        return self == EMPTY_WORKOUT

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the workout."""
        return {
            "activity_type": self.activity_type,
            "icon": self.icon,
            "start_time": self.start_time.isoformat() if not self.is_empty else None,
            "duration_minutes": round(self.duration_minutes, 1),
            "calories_burned": self.calories_burned,
            "average_heart_rate": self.average_heart_rate,
            "peak_heart_rate": self.peak_heart_rate,
            "intensity_score": round(self.intensity_score, 2),
        }


EMPTY_WORKOUT = WorkoutEntry(
    activity_type="",
    icon="",
    start_time=datetime.min,
    duration_minutes=0.0,
)


@dataclass(frozen=True)
class AggregateSnapshot:
    """Read-only view of the aggregate statistics for one year."""

    year: Optional[int]
    workout_count: int
    total_calories_burned: int
    total_workout_time_minutes: int
    type_counts: Dict[str, int]
    most_intense_workout: WorkoutEntry

    @property
    def distinct_activity_types(self) -> int:
        """Number of different activity types seen."""
        return len(self.type_counts)

    def get_summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary of the aggregate."""
        return {
            "year": self.year,
            "workout_count": self.workout_count,
            "total_calories_burned": self.total_calories_burned,
            "total_workout_time_minutes": self.total_workout_time_minutes,
            "distinct_activity_types": self.distinct_activity_types,
            "type_counts": dict(self.type_counts),
            "most_intense_workout": self.most_intense_workout.get_summary(),
        }
