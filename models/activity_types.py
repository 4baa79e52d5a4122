"""Activity type catalogue mapping provider type keys to display labels and icons."""

from typing import Dict
from dataclasses import dataclass


@dataclass(frozen=True)
class ActivityType:
    """Canonical activity type."""

    label: str
    icon: str


DEFAULT_ICON = 'figure.mixed.cardio'
OTHER = ActivityType(label='Other', icon=DEFAULT_ICON)

RUNNING = ActivityType(label='Running', icon='figure.run')
CYCLING = ActivityType(label='Cycling', icon='figure.outdoor.cycle')
SWIMMING = ActivityType(label='Swimming', icon='figure.pool.swim')
WALKING = ActivityType(label='Walking', icon='figure.walk')
HIKING = ActivityType(label='Hiking', icon='figure.hiking')
STRENGTH = ActivityType(label='Strength Training', icon='figure.strengthtraining.traditional')
YOGA = ActivityType(label='Yoga', icon='figure.yoga')
ROWING = ActivityType(label='Rowing', icon='figure.rower')
ELLIPTICAL = ActivityType(label='Elliptical', icon='figure.elliptical')
HIIT = ActivityType(label='HIIT', icon='figure.highintensity.intervaltraining')

# Garmin Connect typeKeys and FIT sport names
ACTIVITY_TYPES: Dict[str, ActivityType] = {
    'running': RUNNING,
    'trail_running': RUNNING,
    'treadmill_running': RUNNING,
    'track_running': RUNNING,
    'cycling': CYCLING,
    'road_biking': CYCLING,
    'mountain_biking': CYCLING,
    'gravel_cycling': CYCLING,
    'indoor_cycling': CYCLING,
    'virtual_ride': CYCLING,
    'swimming': SWIMMING,
    'lap_swimming': SWIMMING,
    'open_water_swimming': SWIMMING,
    'walking': WALKING,
    'casual_walking': WALKING,
    'hiking': HIKING,
    'strength_training': STRENGTH,
    'training': STRENGTH,
    'yoga': YOGA,
    'rowing': ROWING,
    'indoor_rowing': ROWING,
    'elliptical': ELLIPTICAL,
    'fitness_equipment': ELLIPTICAL,
    'hiit': HIIT,
}


def resolve_activity(type_key: str) -> ActivityType:
    """Resolve a provider type key to its canonical activity type.

    Args:
        type_key: Provider activity identifier, e.g. 'trail_running'

    Returns:
        ActivityType; unknown keys get a title-cased label and the generic icon
    """
    if not type_key:
        return OTHER

    key = type_key.strip().lower().replace(' ', '_')
    if key in ACTIVITY_TYPES:
        return ACTIVITY_TYPES[key]

    return ActivityType(label=key.replace('_', ' ').title(), icon=DEFAULT_ICON)
