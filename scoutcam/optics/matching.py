"""
FOV Matching Engine.

Finds the device camera module and zoom factor that best reproduce a target
horizontal FOV. Each module's native HFOV is first corrected by its
calibration multiplier; the zoom needed to hit the target is then clamped to
what the module can physically do, and the module whose achievable FOV lands
closest to the target wins.

No match is signalled by None, never by an exception.
"""

import math
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from ..constants import (
    DEFAULT_MULTIPLIER,
    FALLBACK_ROLE,
    FALLBACK_ZOOM,
    PREFERRED_ROLE_ORDER,
)
from ..utils.logging import get_optics_logger
from ..utils.math_utils import clamp, degrees_to_radians, radians_to_degrees
from .models import DeviceCameraModule, FOVMatchResult, MatchReport

logger = get_optics_logger()


def calibrated_native_hfov_degrees(module: DeviceCameraModule,
                                   multipliers: Optional[Mapping[str, float]] = None) -> float:
    multiplier = (multipliers or {}).get(module.role, DEFAULT_MULTIPLIER)
    return module.native_hfov_degrees * multiplier


def match_module(target_hfov_radians: float,
                 candidate_modules: Iterable[DeviceCameraModule],
                 calibration_multipliers: Optional[Mapping[str, float]] = None
                 ) -> Optional[FOVMatchResult]:
    """
    Pick the module/zoom pair with the smallest angular error.

    Args:
        target_hfov_radians: Horizontal FOV to reproduce
        candidate_modules: Modules in preferred order; ties keep the earlier one
        calibration_multipliers: role -> multiplier, read once for this query

    Returns:
        FOVMatchResult, or None if no candidate gives a finite error or the target is <= 0
    """
    # One consistent view of the calibration for the whole decision
    if hasattr(calibration_multipliers, 'snapshot'):
        multipliers = calibration_multipliers.snapshot()
    else:
        multipliers = dict(calibration_multipliers or {})

    best: Optional[FOVMatchResult] = None

    for module in candidate_modules:
        if not target_hfov_radians > 0:
            continue

        native = degrees_to_radians(calibrated_native_hfov_degrees(module, multipliers))
        required_zoom = native / target_hfov_radians
        zoom = clamp(required_zoom, module.min_zoom, module.max_zoom)
        if not zoom > 0:
            continue
        adjusted = native / zoom
        error = abs(adjusted - target_hfov_radians)
        if not math.isfinite(error):
            continue

        if best is None or error < best.error_radians:
            best = FOVMatchResult(role=module.role, zoom_factor=zoom, error_radians=error)

    if best is None:
        logger.debug(f"No module match for target {target_hfov_radians!r} rad")
    else:
        logger.debug(
            f"Matched '{best.role}' @ {best.zoom_factor:.3f}x "
            f"(error {radians_to_degrees(best.error_radians):.3f}°)"
        )
    return best


def resolve_capture_target(match: Optional[FOVMatchResult]) -> Tuple[str, float]:
    """Role and zoom to configure on the device, falling back to main @ 1.0x."""
    if match is None:
        return FALLBACK_ROLE, FALLBACK_ZOOM
    return match.role, match.zoom_factor


def order_roles(roles: Iterable[str],
                preferred: Sequence[str] = PREFERRED_ROLE_ORDER) -> List[str]:
    """ultra, main, tele first (when present), then everything else sorted."""
    unique = list(dict.fromkeys(roles))
    head = [r for r in preferred if r in unique]
    tail = sorted(r for r in unique if r not in preferred)
    return head + tail


def order_modules(modules: Iterable[DeviceCameraModule],
                  preferred: Sequence[str] = PREFERRED_ROLE_ORDER) -> List[DeviceCameraModule]:
    modules = list(modules)
    rank = {role: i for i, role in enumerate(order_roles((m.role for m in modules), preferred))}
    return sorted(modules, key=lambda m: rank[m.role])


def display_name(role: str) -> str:
    names = {"ultra": "Ultra", "main": "Main", "tele": "Tele"}
    return names.get(role, role.capitalize())


def build_match_report(target_hfov_radians: float,
                       focal_length_mm: float,
                       match: Optional[FOVMatchResult],
                       modules: Iterable[DeviceCameraModule],
                       calibration_multipliers: Optional[Mapping[str, float]] = None
                       ) -> Optional[MatchReport]:
    """Degrees-based summary of a match for display; None without a match."""
    if match is None:
        return None

    multipliers = dict(calibration_multipliers or {})
    module = next((m for m in modules if m.role == match.role), None)
    native = calibrated_native_hfov_degrees(module, multipliers) if module else 0.0
    achieved = native / match.zoom_factor if match.zoom_factor > 0 else 0.0
    target = radians_to_degrees(target_hfov_radians)

    return MatchReport(
        target_hfov_degrees=target,
        achieved_hfov_degrees=achieved,
        error_degrees=abs(achieved - target),
        role=match.role,
        zoom_factor=match.zoom_factor,
        focal_length_mm=focal_length_mm,
        calibration_multiplier=multipliers.get(match.role, DEFAULT_MULTIPLIER),
    )
