"""Configuration settings for Active Recap."""

import os
import logging
from pathlib import Path
from typing import Tuple
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Logger for this module
logger = logging.getLogger(__name__)

# Base paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("ACTIVE_RECAP_DATA_DIR", str(BASE_DIR / "data")))

# Garmin Connect credentials
GARMIN_EMAIL = os.getenv("GARMIN_EMAIL")
GARMIN_PASSWORD = os.getenv("GARMIN_PASSWORD")

# Flag to ensure deprecation warning is logged only once per process
_deprecation_warned = False


def get_garmin_credentials() -> Tuple[str, str]:
    """Get Garmin Connect credentials from environment variables.

    Prefers GARMIN_EMAIL and GARMIN_PASSWORD. Falls back to GARMIN_USERNAME
    with a one-time deprecation warning.

    Returns:
        Tuple of (email, password)

    Raises:
        ValueError: If required credentials are not found
    """
    global _deprecation_warned

    email = os.getenv("GARMIN_EMAIL")
    password = os.getenv("GARMIN_PASSWORD")

    if email and password:
        return email, password

    username = os.getenv("GARMIN_USERNAME")
    if username and password:
        if not _deprecation_warned:
            logger.warning(
                "GARMIN_USERNAME is deprecated. Please use GARMIN_EMAIL instead. "
                "GARMIN_USERNAME will be removed in a future version."
            )
            _deprecation_warned = True
        return username, password

    raise ValueError(
        "Garmin credentials not found. Set GARMIN_EMAIL and GARMIN_PASSWORD "
        "environment variables."
    )


class IntensityConfig:
    """Intensity score constants."""

    AVG_HR_WEIGHT = 0.3
    PEAK_HR_WEIGHT = 0.5
    DURATION_WEIGHT = 0.2
    SCALE_DIVISOR = 100


# Health data source: "garmin" (Garmin Connect) or "fit" (directory of FIT files)
HEALTH_DATA_SOURCE = os.getenv("HEALTH_DATA_SOURCE", "garmin")

# File type detection
SUPPORTED_FORMATS = ['.fit']

# Number of sessions enriched at once; 1 keeps ingestion strictly sequential
INGESTION_CONCURRENCY = int(os.getenv("INGESTION_CONCURRENCY", "1"))

# Day of year after which the year-end review opens
YEAR_END_REVIEW_DAY = int(os.getenv("YEAR_END_REVIEW_DAY", "340"))

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = os.getenv("LOG_FILE", "active_recap.log")
