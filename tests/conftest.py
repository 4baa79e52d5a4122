import asyncio
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add the project root to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from clients.provider import HealthDataProvider
from models.workout import RawSession, HeartRateSample


class FakeProvider(HealthDataProvider):
    """In-memory provider recording every query it receives."""

    def __init__(self, sessions=None, heart_rates=None, available=True, authorized=True,
                 session_error=None, heart_rate_errors=None, delays=None):
        self.sessions = sessions or []
        self.heart_rates = heart_rates or {}  # session start -> list of bpm
        self.available = available
        self.authorized = authorized
        self.session_error = session_error
        self.heart_rate_errors = heart_rate_errors or {}
        self.delays = delays or {}
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def is_data_available(self):
        return self.available

    async def request_authorization(self):
        return self.authorized

    async def fetch_sessions(self, start, end):
        self.calls.append(('sessions', start, end))
        if self.session_error is not None:
            raise self.session_error
        return [s for s in self.sessions if start <= s.start_time < end]

    async def fetch_heart_rate_samples(self, start, end):
        self.calls.append(('heart_rate', start, end))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(start, 0))
            if start in self.heart_rate_errors:
                raise self.heart_rate_errors[start]
            return [
                HeartRateSample(timestamp=start + timedelta(seconds=i), bpm=bpm)
                for i, bpm in enumerate(self.heart_rates.get(start, []))
            ]
        finally:
            self.in_flight -= 1


def _make_session(activity_type, start_time, minutes, energy=None, source_id=None):
    return RawSession(
        activity_type=activity_type,
        start_time=start_time,
        end_time=start_time + timedelta(minutes=minutes),
        duration_seconds=minutes * 60,
        energy_samples=list(energy or []),
        source_id=source_id,
    )


@pytest.fixture
def fake_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def make_session():
    """Factory for RawSession instances lasting a given number of minutes."""
    return _make_session


@pytest.fixture
def now():
    return datetime(2025, 6, 1, 18, 30, 0)
