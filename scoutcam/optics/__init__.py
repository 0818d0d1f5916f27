"""
Optics: FOV geometry, device module matching and calibration.
"""

from .models import (
    SensorGeometry,
    LensSpec,
    CameraMode,
    DeviceCameraModule,
    FOVMatchResult,
    MatchReport,
)
from .fov_math import (
    horizontal_fov,
    vertical_fov,
    degrees_to_radians,
    radians_to_degrees,
    target_hfov,
    parse_aspect_ratio,
    sensor_aspect_ratio,
)
from .matching import (
    match_module,
    resolve_capture_target,
    order_roles,
    order_modules,
    display_name,
    build_match_report,
)
from .calibration import CalibrationStore, CalibrationFile

__all__ = [
    'SensorGeometry', 'LensSpec', 'CameraMode', 'DeviceCameraModule',
    'FOVMatchResult', 'MatchReport',
    'horizontal_fov', 'vertical_fov', 'degrees_to_radians', 'radians_to_degrees',
    'target_hfov', 'parse_aspect_ratio', 'sensor_aspect_ratio',
    'match_module', 'resolve_capture_target', 'order_roles', 'order_modules',
    'display_name', 'build_match_report',
    'CalibrationStore', 'CalibrationFile',
]
