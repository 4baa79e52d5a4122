"""Health data provider backed by a directory of FIT files."""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from config.settings import SUPPORTED_FORMATS
from clients.provider import HealthDataProvider, ProviderError
from models.workout import RawSession, HeartRateSample
from parsers.file_parser import FileParser, ParsedActivity, records_in_window

logger = logging.getLogger(__name__)


class FitDirectoryProvider(HealthDataProvider):
    """Provider reading sessions and heart rate from exported FIT files."""

    def __init__(self, directory: Path, file_parser: Optional[FileParser] = None):
        self.directory = Path(directory)
        self.file_parser = file_parser or FileParser()
        self._activities: Dict[Path, Optional[ParsedActivity]] = {}

    async def is_data_available(self) -> bool:
        return self.directory.is_dir()

    def _load(self) -> List[ParsedActivity]:
        """Parse every supported file in the directory, reusing earlier results."""
        activities = []
        for file_path in sorted(self.directory.rglob('*')):
            if file_path.suffix.lower() not in SUPPORTED_FORMATS:
                continue
            if file_path not in self._activities:
                self._activities[file_path] = self.file_parser.parse_file(file_path)
            if self._activities[file_path] is not None:
                activities.append(self._activities[file_path])
        return activities

    async def _activities_async(self) -> List[ParsedActivity]:
        try:
            return await asyncio.get_event_loop().run_in_executor(None, self._load)
        except OSError as e:
            raise ProviderError(f"Failed to read workout directory {self.directory}: {e}") from e

    async def fetch_sessions(self, start: datetime, end: datetime) -> List[RawSession]:
        activities = await self._activities_async()
        sessions = [
            activity.session for activity in activities
            if start <= activity.session.start_time < end
        ]
        logger.info(f"Found {len(sessions)} workout files between {start:%Y-%m-%d} and {end:%Y-%m-%d}")
        return sessions

    async def fetch_heart_rate_samples(self, start: datetime, end: datetime) -> List[HeartRateSample]:
        activities = await self._activities_async()
        samples = []
        for activity in activities:
            window = records_in_window(activity.records, start, end)
            for timestamp, bpm in zip(window['timestamp'], window['heart_rate']):
                samples.append(HeartRateSample(timestamp=timestamp.to_pydatetime(), bpm=float(bpm)))
        return samples
