"""
Math helpers shared by the optics and sun modules.
"""

import math


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi


def normalize_degrees(angle: float) -> float:
    """Wrap an angle into [0, 360)."""
    return angle % 360.0


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp into [min_val, max_val]; max_val wins if the range is inverted."""
    return min(max(value, min_val), max_val)


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero (not banker's rounding)."""
    return math.copysign(math.floor(abs(value) + 0.5), value)
