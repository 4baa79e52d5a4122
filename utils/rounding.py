"""Rounding helpers for workout metrics."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded away from zero.

    Python's built-in round() rounds halves to even, which would report a
    29.5 minute session as 30 but a 28.5 minute one as 28.
    """
    if value < 0:
        return -round_half_up(-value)
    return int(math.floor(value + 0.5))
