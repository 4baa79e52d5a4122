"""Health data providers for Active Recap."""

from .provider import HealthDataProvider, HealthDataError, DataUnavailable, ProviderError

__all__ = [
    'HealthDataProvider',
    'HealthDataError',
    'DataUnavailable',
    'ProviderError'
]
