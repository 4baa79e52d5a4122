"""Running aggregate statistics over ingested workouts."""

from typing import Dict, Optional

from models.workout import WorkoutEntry, AggregateSnapshot, EMPTY_WORKOUT
from utils.rounding import round_half_up


class AggregateStatsStore:
    """Accumulator for workout totals, per-type counts and the most intense workout.

    The store is filled by a single ingestion run and never shared between
    runs; consumers read it through snapshot().
    """

    def __init__(self):
        self._workout_count = 0
        self._total_calories_burned = 0
        self._total_workout_time = 0
        self._type_counts: Dict[str, int] = {}
        self._most_intense: Optional[WorkoutEntry] = None

    def ingest(self, entry: WorkoutEntry):
        """Add one workout to the running totals."""
        self._workout_count += 1
        self._total_calories_burned += entry.calories_burned
        self._total_workout_time += round_half_up(entry.duration_minutes)
        self._type_counts[entry.activity_type] = self._type_counts.get(entry.activity_type, 0) + 1

        # Strictly greater: on a tie the earlier workout stays
        if entry.intensity_score > self.most_intense_workout.intensity_score:
            self._most_intense = entry

    @property
    def workout_count(self) -> int:
        return self._workout_count

    @property
    def total_calories_burned(self) -> int:
        return self._total_calories_burned

    @property
    def total_workout_time(self) -> int:
        """Total workout time in minutes."""
        return self._total_workout_time

    @property
    def type_counts(self) -> Dict[str, int]:
        return dict(self._type_counts)

    @property
    def most_intense_workout(self) -> WorkoutEntry:
        """Highest scoring workout, or EMPTY_WORKOUT before any has scored above zero."""
        return self._most_intense if self._most_intense is not None else EMPTY_WORKOUT

    def number_of_distinct_activity_types(self) -> int:
        return len(self._type_counts)

    def snapshot(self, year: Optional[int] = None) -> AggregateSnapshot:
        """Get an immutable copy of the current aggregate."""
        return AggregateSnapshot(
            year=year,
            workout_count=self._workout_count,
            total_calories_burned=self._total_calories_burned,
            total_workout_time_minutes=self._total_workout_time,
            type_counts=dict(self._type_counts),
            most_intense_workout=self.most_intense_workout,
        )
