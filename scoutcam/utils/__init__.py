"""
Helper utilities: logging and math.
"""

from .math_utils import (
    degrees_to_radians,
    radians_to_degrees,
    normalize_degrees,
    clamp,
    round_half_away,
)
from .logging import (
    setup_logging,
    parse_level,
    get_logger,
    get_optics_logger,
    get_sun_logger,
    get_calibration_logger,
    get_catalog_logger,
    timed,
    TimedBlock,
)

__all__ = [
    'degrees_to_radians',
    'radians_to_degrees',
    'normalize_degrees',
    'clamp',
    'round_half_away',
    'setup_logging',
    'parse_level',
    'get_logger',
    'get_optics_logger',
    'get_sun_logger',
    'get_calibration_logger',
    'get_catalog_logger',
    'timed',
    'TimedBlock',
]
