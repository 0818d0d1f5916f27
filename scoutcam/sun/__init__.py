"""
Sun: solar position, rise / set times and day paths.
"""

from .models import GeoCoordinate, SunPathSample, SunPath, SunTimes, SunData
from .ephemeris import (
    to_julian,
    from_julian,
    to_days,
    start_of_day,
    sun_position,
    sun_positions,
    sun_times,
    sun_path,
    sun_data,
)

__all__ = [
    'GeoCoordinate', 'SunPathSample', 'SunPath', 'SunTimes', 'SunData',
    'to_julian', 'from_julian', 'to_days', 'start_of_day',
    'sun_position', 'sun_positions', 'sun_times', 'sun_path', 'sun_data',
]
