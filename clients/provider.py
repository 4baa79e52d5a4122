"""Health data provider interface consumed by the ingestion pipeline."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from models.workout import RawSession, HeartRateSample


class HealthDataError(Exception):
    """Base class for health data provider failures."""


class DataUnavailable(HealthDataError):
    """The provider cannot be queried at all."""


class ProviderError(HealthDataError):
    """A specific provider query failed."""


class HealthDataProvider(ABC):
    """Source of raw workout sessions and heart rate samples.

    All query methods are coroutines; blocking implementations should hand
    their work to an executor.
    """

    @abstractmethod
    async def is_data_available(self) -> bool:
        """Check whether the provider can be queried."""

    async def request_authorization(self) -> bool:
        """Request read access to workout data.

        Returns:
            True if access was granted
        """
        return True

    @abstractmethod
    async def fetch_sessions(self, start: datetime, end: datetime) -> List[RawSession]:
        """Fetch every session that starts within [start, end).

        Raises:
            ProviderError: If the query fails
        """

    @abstractmethod
    async def fetch_heart_rate_samples(self, start: datetime, end: datetime) -> List[HeartRateSample]:
        """Fetch heart rate samples recorded within [start, end).

        Raises:
            ProviderError: If the query fails
        """
