"""
Sun records. All datetimes are timezone-aware UTC instants.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass(frozen=True)
class GeoCoordinate:
    """Latitude / longitude in decimal degrees (east positive)."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class SunPathSample:
    time: datetime
    azimuth_degrees: float      # compass, 0 = north
    altitude_degrees: float


SunPath = List[SunPathSample]


@dataclass(frozen=True)
class SunTimes:
    sunrise: datetime
    sunset: datetime
    solar_noon: datetime

    @property
    def day_length_seconds(self) -> float:
        return (self.sunset - self.sunrise).total_seconds()


@dataclass(frozen=True)
class SunData:
    """Sun times for one local day plus the sampled path between them."""
    sunrise: datetime
    sunset: datetime
    solar_noon: datetime
    path: List[SunPathSample] = field(default_factory=list)

    @property
    def times(self) -> SunTimes:
        return SunTimes(self.sunrise, self.sunset, self.solar_noon)
