"""Tests for per-session heart rate enrichment."""

import asyncio
import logging
from datetime import datetime, timedelta

import pytest

from analyzers.heart_rate import HeartRateEnricher
from clients.provider import HealthDataProvider, ProviderError
from models.workout import HeartRateSample

START = datetime(2025, 3, 2, 7, 0, 0)
END = START + timedelta(minutes=40)


class StubProvider(HealthDataProvider):
    """Returns a fixed list of samples regardless of the window."""

    def __init__(self, samples=None, error=None):
        self.samples = samples or []
        self.error = error
        self.requested = []

    async def is_data_available(self):
        return True

    async def fetch_sessions(self, start, end):
        return []

    async def fetch_heart_rate_samples(self, start, end):
        self.requested.append((start, end))
        if self.error is not None:
            raise self.error
        return self.samples


def samples_at(*bpms, offset_minutes=1):
    return [
        HeartRateSample(timestamp=START + timedelta(minutes=offset_minutes + i), bpm=bpm)
        for i, bpm in enumerate(bpms)
    ]


def enrich(provider):
    return asyncio.run(HeartRateEnricher(provider).enrich(START, END))


def test_average_and_peak_are_rounded():
    provider = StubProvider(samples_at(120, 130, 141))

    assert enrich(provider) == (130, 141)
    assert provider.requested == [(START, END)]


def test_half_beats_round_up():
    assert enrich(StubProvider(samples_at(120, 121))) == (121, 121)
    assert enrich(StubProvider(samples_at(150.5))) == (151, 151)


def test_no_samples_gives_zero():
    assert enrich(StubProvider([])) == (0, 0)


def test_samples_outside_the_session_are_ignored():
    samples = [
        HeartRateSample(timestamp=START - timedelta(seconds=1), bpm=190),
        HeartRateSample(timestamp=START, bpm=100),
        HeartRateSample(timestamp=START + timedelta(minutes=10), bpm=110),
        HeartRateSample(timestamp=END, bpm=200),
    ]

    assert enrich(StubProvider(samples)) == (105, 110)


def test_failed_lookup_is_logged_not_raised(caplog):
    provider = StubProvider(error=ProviderError("query failed"))

    with caplog.at_level(logging.WARNING, logger='analyzers.heart_rate'):
        assert enrich(provider) == (0, 0)

    assert "Heart rate lookup failed" in caplog.text
    assert "query failed" in caplog.text


def test_unexpected_provider_error_is_contained():
    assert enrich(StubProvider(error=RuntimeError("socket closed"))) == (0, 0)


def test_cancellation_is_not_swallowed():
    class HangingProvider(StubProvider):
        async def fetch_heart_rate_samples(self, start, end):
            await asyncio.sleep(10)

    async def scenario():
        task = asyncio.ensure_future(HeartRateEnricher(HangingProvider()).enrich(START, END))
        await asyncio.sleep(0)
        task.cancel()
        await task

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(scenario())
