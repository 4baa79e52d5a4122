"""Per-session heart rate enrichment."""

import logging
from datetime import datetime
from typing import Tuple
import numpy as np

from clients.provider import HealthDataProvider
from utils.rounding import round_half_up

logger = logging.getLogger(__name__)


class HeartRateEnricher:
    """Looks up a session's heart rate samples and reduces them to average and peak."""

    def __init__(self, provider: HealthDataProvider):
        self.provider = provider

    async def enrich(self, session_start: datetime, session_end: datetime) -> Tuple[int, int]:
        """Get average and peak heart rate for a session.

        A failed lookup or a session without samples yields (0, 0); the
        failure is logged and not raised.

        Args:
            session_start: Session start (inclusive)
            session_end: Session end (exclusive)

        Returns:
            Tuple of (average_bpm, peak_bpm), rounded to whole beats
        """
        try:
            samples = await self.provider.fetch_heart_rate_samples(session_start, session_end)
        except Exception as e:
            logger.warning(f"Heart rate lookup failed for session {session_start} - {session_end}: {e}")
            return 0, 0

        hr_values = np.array(
            [s.bpm for s in samples if session_start <= s.timestamp < session_end and s.bpm is not None],
            dtype=float,
        )
        hr_values = hr_values[~np.isnan(hr_values)]

        if hr_values.size == 0:
            logger.info(f"No heart rate samples for session {session_start} - {session_end}")
            return 0, 0

        return round_half_up(np.mean(hr_values)), round_half_up(np.max(hr_values))
