"""Year recap state exposed to the presentation layer."""

import logging
from datetime import datetime
from typing import Dict, Optional

from analyzers.aggregate_stats import AggregateStatsStore
from analyzers.workout_ingestion import WorkoutIngestionPipeline
from clients.provider import HealthDataProvider
from models.workout import AggregateSnapshot, WorkoutEntry

logger = logging.getLogger(__name__)


class WorkoutRecap:
    """Holds the published aggregate for the selected year.

    run_ingestion() builds a new aggregate in a private store and publishes it
    only when the run completes. A cancelled run leaves the previous aggregate
    in place.
    """

    def __init__(
        self,
        provider: Optional[HealthDataProvider] = None,
        year: Optional[int] = None,
        pipeline: Optional[WorkoutIngestionPipeline] = None,
    ):
        """Initialize the recap.

        Args:
            provider: Health data source (may be omitted when a pipeline is given)
            year: Reporting year (defaults to the current year)
            pipeline: Prebuilt ingestion pipeline; must read from the same provider

        Raises:
            ValueError: If neither is given, or the pipeline reads another provider
        """
        if pipeline is None:
            if provider is None:
                raise ValueError("WorkoutRecap needs a provider or a pipeline")
            pipeline = WorkoutIngestionPipeline(provider)
        elif provider is not None and pipeline.provider is not provider:
            raise ValueError("Pipeline reads from a different provider than the one given")
        self.pipeline = pipeline
        self.year = year if year is not None else datetime.now().year
        self._snapshot = AggregateStatsStore().snapshot(self.year)

    async def run_ingestion(self, year: Optional[int] = None) -> AggregateSnapshot:
        """Populate the recap for a year, replacing any previous one.

        Args:
            year: Reporting year (defaults to the recap's current year)

        Returns:
            The published snapshot
        """
        year = year if year is not None else self.year
        logger.info(f"Building workout recap for {year}")

        store = await self.pipeline.run(year)

        self.year = year
        self._snapshot = store.snapshot(year)
        return self._snapshot

    def snapshot(self) -> AggregateSnapshot:
        return self._snapshot

    @property
    def workout_count(self) -> int:
        return self._snapshot.workout_count

    @property
    def total_calories_burned(self) -> int:
        return self._snapshot.total_calories_burned

    @property
    def total_workout_time(self) -> int:
        """Total workout time in minutes."""
        return self._snapshot.total_workout_time_minutes

    @property
    def type_counts(self) -> Dict[str, int]:
        return dict(self._snapshot.type_counts)

    @property
    def most_intense_workout(self) -> WorkoutEntry:
        return self._snapshot.most_intense_workout

    def number_of_distinct_activity_types(self) -> int:
        return self._snapshot.distinct_activity_types
