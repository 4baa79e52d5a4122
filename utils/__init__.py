"""Utility helpers for Active Recap."""

from .rounding import round_half_up
from .timeutils import utc_to_local

__all__ = ['round_half_up', 'utc_to_local']
