"""File parser for FIT workout files."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Any, Optional
import pandas as pd

try:
    from fitparse import FitFile
except ImportError:
    raise ImportError("fitparse package required. Install with: pip install fitparse")

from config.settings import SUPPORTED_FORMATS
from models.workout import RawSession
from utils.timeutils import utc_to_local

logger = logging.getLogger(__name__)


@dataclass
class ParsedActivity:
    """Session summary and per-record samples from one workout file."""

    file_path: Path
    session: RawSession
    records: pd.DataFrame


class FileParser:
    """Parser for workout files."""

    def parse_file(self, file_path: Path) -> Optional[ParsedActivity]:
        """Parse a workout file and return its session and records.

        Args:
            file_path: Path to the workout file

        Returns:
            ParsedActivity or None if parsing failed
        """
        if not file_path.exists():
            logger.error(f"File not found: {file_path}")
            return None

        file_extension = file_path.suffix.lower()

        if file_extension not in SUPPORTED_FORMATS:
            logger.error(f"Unsupported file format: {file_extension}")
            return None

        try:
            return self._parse_fit(file_path)
        except Exception as e:
            logger.error(f"Failed to parse file {file_path}: {e}")
            return None

    def _parse_fit(self, file_path: Path) -> Optional[ParsedActivity]:
        """Parse FIT file format.

        Args:
            file_path: Path to FIT file

        Returns:
            ParsedActivity or None if the file has no session
        """
        fit_file = FitFile(str(file_path))

        session_data = self._extract_fit_session(fit_file)
        if not session_data or 'start_time' not in session_data:
            logger.error(f"No session data found in FIT file {file_path}")
            return None

        records = self._fit_records_to_dataframe(fit_file.get_messages('record'))

        # FIT stores UTC; reporting windows are local time
        start_time = utc_to_local(pd.Timestamp(session_data['start_time']).to_pydatetime())
        duration_seconds = float(
            session_data.get('total_timer_time') or session_data.get('total_elapsed_time') or 0
        )
        elapsed_seconds = float(session_data.get('total_elapsed_time') or duration_seconds)
        calories = session_data.get('total_calories')

        session = RawSession(
            activity_type=str(session_data.get('sport', '')),
            start_time=start_time,
            end_time=start_time + timedelta(seconds=elapsed_seconds),
            duration_seconds=duration_seconds,
            energy_samples=[float(calories)] if calories is not None else [],
            source_id=str(file_path),
        )

        return ParsedActivity(file_path=file_path, session=session, records=records)

    def _extract_fit_session(self, fit_file) -> Optional[Dict[str, Any]]:
        """Extract session data from FIT file.

        Args:
            fit_file: FIT file object

        Returns:
            Dictionary with session data
        """
        sessions = list(fit_file.get_messages('session'))
        if not sessions:
            return None

        data = {}
        for field in sessions[0]:
            if field.name and field.value is not None:
                data[field.name] = field.value

        return data

    def _fit_records_to_dataframe(self, records) -> pd.DataFrame:
        """Convert FIT records to a timestamp/heart_rate DataFrame.

        Timestamps are converted from UTC to naive local time.

        Args:
            records: Iterable of FIT record messages

        Returns:
            DataFrame sorted by timestamp; empty if no heart rate was recorded
        """
        data = []

        for record in records:
            record_data = {}
            for field in record:
                if field.name in ('timestamp', 'heart_rate') and field.value is not None:
                    record_data[field.name] = field.value
            if 'timestamp' in record_data and 'heart_rate' in record_data:
                record_data['timestamp'] = utc_to_local(pd.Timestamp(record_data['timestamp']).to_pydatetime())
                data.append(record_data)

        if not data:
            return pd.DataFrame(columns=['timestamp', 'heart_rate'])

        df = pd.DataFrame(data)
        df['timestamp'] = pd.to_datetime(df['timestamp'])
        df = df.sort_values('timestamp')
        df = df.reset_index(drop=True)

        return df


def records_in_window(records: pd.DataFrame, start: datetime, end: datetime) -> pd.DataFrame:
    """Select the records whose timestamp falls within [start, end)."""
    if records.empty:
        return records
    mask = (records['timestamp'] >= pd.Timestamp(start)) & (records['timestamp'] < pd.Timestamp(end))
    return records.loc[mask]
