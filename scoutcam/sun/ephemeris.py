"""
Solar Ephemeris Engine.

Low-precision solar position (mean anomaly + equation of center), good to
about a minute around sunrise / sunset. Enough for light planning, not for
astronomy.

All angles are radians unless a name says degrees. `d` is days since J2000.0
and `lw` is the observer's west longitude in radians.

Every function is pure. "No sunrise" (polar day or night) and an empty
sampling window are results (None / []), not errors.
"""

import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterable, List, Optional, Union

import numpy as np

from ..constants import (
    DEFAULT_PATH_INTERVAL_MINUTES,
    JULIAN_1970,
    JULIAN_2000,
    MEAN_ANOMALY_DEG,
    MEAN_ANOMALY_RATE,
    OBLIQUITY_DEG,
    PERIHELION_DEG,
    SECONDS_PER_DAY,
    SIDEREAL_DEG,
    SIDEREAL_RATE,
    SUNRISE_ALTITUDE_DEG,
    TRANSIT_J0,
)
from ..utils.logging import get_sun_logger, timed
from ..utils.math_utils import normalize_degrees, round_half_away
from .models import GeoCoordinate, SunData, SunPathSample, SunTimes

logger = get_sun_logger()

RAD = math.pi / 180.0
OBLIQUITY = OBLIQUITY_DEG * RAD


# ---------------------------------------------------------------------------
# Time conversions
# ---------------------------------------------------------------------------

def _as_utc(when: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc)


def to_julian(when: datetime) -> float:
    return _as_utc(when).timestamp() / SECONDS_PER_DAY + JULIAN_1970


def from_julian(julian: float) -> datetime:
    return datetime.fromtimestamp((julian - JULIAN_1970) * SECONDS_PER_DAY, tz=timezone.utc)


def to_days(when: datetime) -> float:
    """Days since J2000.0."""
    return to_julian(when) - JULIAN_2000


def start_of_day(when: Union[date, datetime], tz: tzinfo) -> datetime:
    """Local midnight of the calendar day `when` falls on in `tz`."""
    if isinstance(when, datetime):
        day = _as_utc(when).astimezone(tz).date()
    else:
        day = when
    return datetime.combine(day, time.min, tzinfo=tz)


# ---------------------------------------------------------------------------
# Solar coordinates (scalar or numpy array `d`)
# ---------------------------------------------------------------------------

def solar_mean_anomaly(d):
    return RAD * (MEAN_ANOMALY_DEG + MEAN_ANOMALY_RATE * d)


def equation_of_center(m):
    return RAD * (1.9148 * np.sin(m) + 0.02 * np.sin(2 * m) + 0.0003 * np.sin(3 * m))


def ecliptic_longitude(m):
    return m + equation_of_center(m) + RAD * PERIHELION_DEG + math.pi


def declination(l):
    return np.arcsin(math.sin(OBLIQUITY) * np.sin(l))


def right_ascension(l):
    return np.arctan2(np.sin(l) * math.cos(OBLIQUITY), np.cos(l))


def sidereal_time(d, lw):
    return RAD * (SIDEREAL_DEG + SIDEREAL_RATE * d) - lw


def altitude(hour_angle, phi, dec):
    return np.arcsin(np.sin(phi) * np.sin(dec) + np.cos(phi) * np.cos(dec) * np.cos(hour_angle))


def azimuth(hour_angle, phi, dec):
    """South-referenced azimuth (0 = south, west positive)."""
    return np.arctan2(np.sin(hour_angle),
                      np.cos(hour_angle) * np.sin(phi) - np.tan(dec) * np.cos(phi))


def _horizontal(d, coordinate: GeoCoordinate):
    """Compass azimuth and altitude, in degrees, for days-since-J2000 `d`."""
    lw = -coordinate.longitude * RAD
    phi = coordinate.latitude * RAD

    l = ecliptic_longitude(solar_mean_anomaly(d))
    dec = declination(l)
    h = sidereal_time(d, lw) - right_ascension(l)

    az = normalize_degrees(azimuth(h, phi, dec) / RAD + 180.0)
    alt = altitude(h, phi, dec) / RAD
    return az, alt


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

def sun_position(coordinate: GeoCoordinate, when: datetime) -> SunPathSample:
    """Sun azimuth (compass, 0 = north) and altitude at an instant."""
    az, alt = _horizontal(to_days(when), coordinate)
    return SunPathSample(time=_as_utc(when), azimuth_degrees=float(az), altitude_degrees=float(alt))


def sun_positions(coordinate: GeoCoordinate, times: Iterable[datetime]) -> List[SunPathSample]:
    """Vectorized sun_position over a sequence of instants."""
    instants = [_as_utc(t) for t in times]
    if not instants:
        return []
    d = np.array([to_days(t) for t in instants], dtype=np.float64)
    az, alt = _horizontal(d, coordinate)
    return [
        SunPathSample(time=t, azimuth_degrees=float(a), altitude_degrees=float(e))
        for t, a, e in zip(instants, az, alt)
    ]


# ---------------------------------------------------------------------------
# Rise / set / transit
# ---------------------------------------------------------------------------

def julian_cycle(d: float, lw: float) -> float:
    return round_half_away(d - TRANSIT_J0 - lw / (2 * math.pi))


def approx_transit(ht: float, lw: float, n: float) -> float:
    return TRANSIT_J0 + (ht + lw) / (2 * math.pi) + n


def solar_transit_j(ds: float, m: float, l: float) -> float:
    return JULIAN_2000 + ds + 0.0053 * math.sin(m) - 0.0069 * math.sin(2 * l)


def hour_angle(h0: float, phi: float, dec: float) -> Optional[float]:
    """
    Hour angle at which the sun crosses altitude h0.

    None when the sun never crosses it that day (polar day or night).
    """
    cos_w = (math.sin(h0) - math.sin(phi) * math.sin(dec)) / (math.cos(phi) * math.cos(dec))
    if not -1.0 <= cos_w <= 1.0:
        return None
    return math.acos(cos_w)


def sun_times(coordinate: GeoCoordinate, day_start: datetime) -> Optional[SunTimes]:
    """
    Sunrise, sunset and solar noon for the day beginning at `day_start`.

    Returns None when the sun does not rise or set (polar day / night).
    """
    lw = -coordinate.longitude * RAD
    phi = coordinate.latitude * RAD
    # Anchor the cycle at the day's midday so the transit belongs to this calendar day
    d = to_days(day_start + timedelta(hours=12))

    n = julian_cycle(d, lw)
    ds = approx_transit(0.0, lw, n)
    m = float(solar_mean_anomaly(ds))
    l = float(ecliptic_longitude(m))
    dec = float(declination(l))

    jnoon = solar_transit_j(ds, m, l)
    w0 = hour_angle(SUNRISE_ALTITUDE_DEG * RAD, phi, dec)
    if w0 is None:
        logger.debug(
            f"No sunrise/sunset at ({coordinate.latitude:.4f}, {coordinate.longitude:.4f}) "
            f"for day starting {day_start.isoformat()}"
        )
        return None

    # Sunset sits w0 after transit, sunrise mirrors it about solar noon
    jset = jnoon + w0 / (2 * math.pi)
    jrise = jnoon - (jset - jnoon)

    return SunTimes(
        sunrise=from_julian(jrise),
        sunset=from_julian(jset),
        solar_noon=from_julian(jnoon),
    )


# ---------------------------------------------------------------------------
# Path sampling
# ---------------------------------------------------------------------------

def sun_path(coordinate: GeoCoordinate, sunrise: datetime, sunset: datetime,
             interval_minutes: int = DEFAULT_PATH_INTERVAL_MINUTES) -> List[SunPathSample]:
    """
    Samples every `interval_minutes` from sunrise, always ending exactly at sunset.

    Empty when sunrise is not before sunset.
    """
    start, end = _as_utc(sunrise), _as_utc(sunset)
    if not start < end:
        return []
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")

    step = timedelta(minutes=interval_minutes)
    times = []
    current = start
    while current <= end:
        times.append(current)
        current += step
    if times[-1] != end:
        times.append(end)

    return sun_positions(coordinate, times)


@timed(logger)
def sun_data(coordinate: GeoCoordinate, when: Union[date, datetime], tz: tzinfo,
             interval_minutes: int = DEFAULT_PATH_INTERVAL_MINUTES) -> Optional[SunData]:
    """Sun times and path for the local calendar day containing `when`."""
    day_start = start_of_day(when, tz)
    times = sun_times(coordinate, day_start)
    if times is None:
        return None

    path = sun_path(coordinate, times.sunrise, times.sunset, interval_minutes)
    logger.debug(
        f"Sun data for {day_start.date()}: rise {times.sunrise.isoformat()}, "
        f"set {times.sunset.isoformat()}, {len(path)} path samples"
    )
    return SunData(
        sunrise=times.sunrise,
        sunset=times.sunset,
        solar_noon=times.solar_noon,
        path=path,
    )
