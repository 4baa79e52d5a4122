"""Garmin Connect health data provider."""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional, Dict, Any, List

try:
    from garminconnect import Garmin
except ImportError:
    raise ImportError("garminconnect package required. Install with: pip install garminconnect")

from config.settings import get_garmin_credentials
from clients.provider import HealthDataProvider, DataUnavailable, ProviderError
from models.workout import RawSession, HeartRateSample


logger = logging.getLogger(__name__)

GARMIN_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class GarminConnectProvider(HealthDataProvider):
    """Provider reading activities and heart rate from Garmin Connect."""

    def __init__(self, email: Optional[str] = None, password: Optional[str] = None):
        """Initialize Garmin provider.

        Missing credentials leave the provider unavailable rather than failing.

        Args:
            email: Garmin Connect email (defaults to standardized accessor)
            password: Garmin Connect password (defaults to standardized accessor)
        """
        self.email: Optional[str] = None
        self.password: Optional[str] = None
        if email and password:
            self.email = email
            self.password = password
        else:
            try:
                self.email, self.password = get_garmin_credentials()
            except ValueError as e:
                logger.warning(f"Garmin Connect is unavailable: {e}")

        self.client = None
        self._authenticated = False

    def authenticate(self) -> bool:
        """Authenticate with Garmin Connect.

        Returns:
            True if authentication successful, False otherwise
        """
        try:
            self.client = Garmin(self.email, self.password)
            self.client.login()
            self._authenticated = True
            logger.info("Successfully authenticated with Garmin Connect")
            return True
        except Exception as e:
            logger.error(f"Failed to authenticate with Garmin Connect: {e}")
            self._authenticated = False
            return False

    def is_authenticated(self) -> bool:
        """Check if client is authenticated."""
        return self._authenticated and self.client is not None

    async def _run(self, func, *args):
        # garminconnect is blocking
        return await asyncio.get_event_loop().run_in_executor(None, func, *args)

    async def is_data_available(self) -> bool:
        return bool(self.email and self.password)

    async def request_authorization(self) -> bool:
        if self.is_authenticated():
            return True
        if not (self.email and self.password):
            return False
        return await self._run(self.authenticate)

    async def fetch_sessions(self, start: datetime, end: datetime) -> List[RawSession]:
        """Fetch activities that start within [start, end).

        Args:
            start: Window start (inclusive)
            end: Window end (exclusive)

        Returns:
            List of raw sessions in the order Garmin Connect returned them
        """
        if not self.is_authenticated():
            raise DataUnavailable("Not authenticated with Garmin Connect")

        try:
            activities = await self._run(
                self.client.get_activities_by_date,
                start.date().isoformat(),
                end.date().isoformat(),
            )
        except Exception as e:
            raise ProviderError(f"Failed to get activities between {start} and {end}: {e}") from e

        sessions = []
        for activity in activities or []:
            session = self._activity_to_session(activity)
            if session is not None and start <= session.start_time < end:
                sessions.append(session)

        logger.info(f"Found {len(sessions)} activities between {start:%Y-%m-%d} and {end:%Y-%m-%d}")
        return sessions

    async def fetch_heart_rate_samples(self, start: datetime, end: datetime) -> List[HeartRateSample]:
        """Fetch heart rate samples within [start, end).

        Garmin Connect serves heart rate per calendar day, so every day the
        window touches is requested and the samples are trimmed to the window.
        """
        if not self.is_authenticated():
            raise DataUnavailable("Not authenticated with Garmin Connect")

        samples = []
        day = start.date()
        while day <= end.date():
            try:
                data = await self._run(self.client.get_heart_rates, day.isoformat())
            except Exception as e:
                raise ProviderError(f"Failed to get heart rates for {day}: {e}") from e

            for timestamp_ms, bpm in (data or {}).get('heartRateValues') or []:
                if bpm is None:
                    continue
                timestamp = datetime.fromtimestamp(timestamp_ms / 1000)
                if start <= timestamp < end:
                    samples.append(HeartRateSample(timestamp=timestamp, bpm=float(bpm)))
            day += timedelta(days=1)

        logger.debug(f"Retrieved {len(samples)} heart rate samples for {start} - {end}")
        return samples

    def _activity_to_session(self, activity: Dict[str, Any]) -> Optional[RawSession]:
        """Convert a Garmin Connect activity dictionary to a RawSession.

        Args:
            activity: Activity summary as returned by get_activities_by_date

        Returns:
            RawSession or None if the activity has no usable start time
        """
        activity_id = activity.get('activityId')
        try:
            start_time = datetime.strptime(activity.get('startTimeLocal', ''), GARMIN_TIME_FORMAT)
        except (TypeError, ValueError):
            logger.warning(f"Skipping activity {activity_id}: unreadable start time {activity.get('startTimeLocal')!r}")
            return None

        duration_seconds = float(activity.get('duration') or 0)
        calories = activity.get('calories')

        return RawSession(
            activity_type=(activity.get('activityType') or {}).get('typeKey', ''),
            start_time=start_time,
            end_time=start_time + timedelta(seconds=duration_seconds),
            duration_seconds=duration_seconds,
            energy_samples=[float(calories)] if calories is not None else [],
            source_id=str(activity_id) if activity_id is not None else None,
        )
