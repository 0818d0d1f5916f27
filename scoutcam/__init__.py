"""
scoutcam - optics and sun calculations for a location-scouting camera.

This package provides:
- Field-of-view geometry for cinema sensors and lenses (incl. anamorphic)
- Matching a target FOV to a phone camera module and zoom factor
- Per-device FOV calibration multipliers
- Sun position, sunrise / sunset / solar noon and day paths
"""

__version__ = "1.0.0"

# Keep __init__ lightweight: submodules are imported by callers as needed.

__all__ = [
    '__version__',
]
