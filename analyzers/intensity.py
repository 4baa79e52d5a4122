"""Workout intensity scoring."""

from config.settings import IntensityConfig


def intensity_score(avg_heart_rate: float, peak_heart_rate: float, duration_minutes: float) -> float:
    """Calculate the intensity score of a workout.

    The score is the product of the three scaled metrics, so a zero in any of
    them yields zero.

    Args:
        avg_heart_rate: Average heart rate in bpm
        peak_heart_rate: Peak heart rate in bpm
        duration_minutes: Session duration in minutes

    Returns:
        Non-negative intensity score
    """
    return (
        (avg_heart_rate * IntensityConfig.AVG_HR_WEIGHT)
        * (peak_heart_rate * IntensityConfig.PEAK_HR_WEIGHT)
        * (duration_minutes * IntensityConfig.DURATION_WEIGHT)
        / IntensityConfig.SCALE_DIVISOR
    )
