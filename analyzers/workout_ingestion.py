"""Workout ingestion: fetch, enrich, score and aggregate a year of sessions."""

import asyncio
import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from analyzers.aggregate_stats import AggregateStatsStore
from analyzers.date_range import resolve_date_range
from analyzers.heart_rate import HeartRateEnricher
from analyzers.intensity import intensity_score
from clients.provider import HealthDataProvider, DataUnavailable
from config import settings
from models.activity_types import resolve_activity
from models.workout import RawSession, WorkoutEntry
from utils.rounding import round_half_up

logger = logging.getLogger(__name__)


class WorkoutIngestionPipeline:
    """Builds the aggregate statistics for one reporting year.

    Sessions are enriched one at a time in the order the provider returned
    them. With concurrency > 1 the heart rate lookups overlap, but entries are
    still ingested in fetch order so ties resolve the same way.
    """

    def __init__(
        self,
        provider: HealthDataProvider,
        enricher: Optional[HeartRateEnricher] = None,
        concurrency: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.provider = provider
        self.enricher = enricher or HeartRateEnricher(provider)
        if concurrency is None:
            concurrency = settings.INGESTION_CONCURRENCY
        self.concurrency = max(1, concurrency)
        self.clock = clock or datetime.now

    async def run(self, year: int) -> AggregateStatsStore:
        """Ingest every session of a year into a fresh store.

        Provider failures are logged and leave the store empty or partially
        filled; nothing is raised to the caller.

        Args:
            year: Reporting year

        Returns:
            Populated AggregateStatsStore
        """
        store = AggregateStatsStore()
        start, end = resolve_date_range(year, self.clock())

        sessions = await self._fetch_sessions(start, end)
        if not sessions:
            return store

        logger.info(f"Ingesting {len(sessions)} sessions for {year}")

        if self.concurrency == 1:
            for index, session in enumerate(sessions):
                entry = await self._build_entry_safely(index, session)
                if entry is not None:
                    store.ingest(entry)
        else:
            for _, entry in await self._build_entries_concurrently(sessions):
                if entry is not None:
                    store.ingest(entry)

        logger.info(
            f"Ingested {store.workout_count} of {len(sessions)} sessions for {year}: "
            f"{store.total_calories_burned} kcal, {store.total_workout_time} min"
        )
        return store

    async def _fetch_sessions(self, start: datetime, end: datetime) -> List[RawSession]:
        """Fetch the window's sessions, or an empty list if the provider fails."""
        try:
            if not await self.provider.is_data_available():
                logger.warning("Health data is not available on this source")
                return []
            if not await self.provider.request_authorization():
                logger.warning("Read access to workout data was not granted")
                return []
            return list(await self.provider.fetch_sessions(start, end))
        except DataUnavailable as e:
            logger.warning(f"Health data unavailable: {e}")
            return []
        except Exception as e:
            logger.error(f"Failed to fetch workouts between {start} and {end}: {e}")
            return []

    async def _build_entries_concurrently(
        self, sessions: List[RawSession]
    ) -> List[Tuple[int, Optional[WorkoutEntry]]]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def build(index: int, session: RawSession) -> Tuple[int, Optional[WorkoutEntry]]:
            async with semaphore:
                return index, await self._build_entry_safely(index, session)

        results = await asyncio.gather(*(build(i, s) for i, s in enumerate(sessions)))
        return sorted(results, key=lambda result: result[0])

    async def _build_entry_safely(self, index: int, session: RawSession) -> Optional[WorkoutEntry]:
        try:
            return await self.build_entry(session)
        except Exception as e:
            logger.error(f"Skipping session {session.source_id or index} ({session.activity_type}): {e}")
            return None

    async def build_entry(self, session: RawSession) -> WorkoutEntry:
        """Enrich and score a single session.

        Args:
            session: Raw session from the provider

        Returns:
            WorkoutEntry with calories, heart rate and intensity filled in
        """
        calories = round_half_up(sum(session.energy_samples)) if session.energy_samples else 0
        avg_hr, peak_hr = await self.enricher.enrich(session.start_time, session.end_time)
        duration_minutes = session.duration_minutes
        activity = resolve_activity(session.activity_type)

        return WorkoutEntry(
            activity_type=activity.label,
            icon=activity.icon,
            start_time=session.start_time,
            duration_minutes=duration_minutes,
            calories_burned=calories,
            average_heart_rate=avg_hr,
            peak_heart_rate=peak_hr,
            intensity_score=intensity_score(avg_hr, peak_hr, duration_minutes),
        )
