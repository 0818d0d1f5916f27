"""
Field-of-view geometry.

Pinhole relations between sensor size, focal length and angular field of
view. Callers guarantee positive sensor dimensions and focal lengths (the
catalog loader validates them), so nothing here checks its inputs.
"""

import math
from typing import Optional, Union

from ..utils.math_utils import degrees_to_radians, radians_to_degrees
from .models import CameraMode, LensSpec, SensorGeometry

__all__ = [
    'horizontal_fov',
    'vertical_fov',
    'degrees_to_radians',
    'radians_to_degrees',
    'target_hfov',
    'parse_aspect_ratio',
    'sensor_aspect_ratio',
]


def horizontal_fov(sensor_width_mm: float, focal_length_mm: float, squeeze: float = 1.0) -> float:
    """
    Horizontal FOV in radians.

    The squeeze factor widens the effective sensor width to account for
    anamorphic desqueeze; spherical lenses use 1.0.
    """
    return 2.0 * math.atan((sensor_width_mm * squeeze) / (2.0 * focal_length_mm))


def vertical_fov(sensor_height_mm: float, focal_length_mm: float) -> float:
    """Vertical FOV in radians."""
    return 2.0 * math.atan(sensor_height_mm / (2.0 * focal_length_mm))


def target_hfov(source: Union[SensorGeometry, CameraMode], lens: LensSpec,
                focal_length_mm: Optional[float] = None) -> float:
    """Target HFOV (radians) for a reference camera mode / sensor and lens."""
    sensor = source.sensor if isinstance(source, CameraMode) else source
    focal = lens.active_focal_length(focal_length_mm)
    return horizontal_fov(sensor.width_mm, focal, lens.squeeze)


def parse_aspect_ratio(text: Optional[str]) -> Optional[float]:
    """
    Parse '16:9', '4x3' or '1.78' into a width/height ratio.

    Returns None for anything unparseable or non-positive.
    """
    if not text:
        return None
    cleaned = str(text).lower().replace(" ", "")
    for separator in (":", "x"):
        if separator in cleaned:
            parts = cleaned.split(separator)
            if len(parts) != 2:
                return None
            try:
                w, h = float(parts[0]), float(parts[1])
            except ValueError:
                return None
            if h == 0:
                return None
            ratio = w / h
            return ratio if ratio > 0 else None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    return value if value > 0 else None


def sensor_aspect_ratio(mode: CameraMode) -> Optional[float]:
    """Aspect ratio from sensor dimensions, falling back to the mode's label."""
    if mode.sensor.width_mm > 0 and mode.sensor.height_mm > 0:
        return mode.sensor.aspect_ratio
    return parse_aspect_ratio(mode.aspect_ratio)
