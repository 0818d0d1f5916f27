"""
Optics records: sensors, lenses, device camera modules and match results.

Records are built by the catalog loader (which validates their invariants);
the optics functions consume them without re-checking.
"""

from dataclasses import dataclass
from typing import Optional

from ..constants import SPHERICAL_SQUEEZE
from ..utils.math_utils import clamp


@dataclass(frozen=True)
class SensorGeometry:
    """Sensor (or recording-mode crop) size in millimeters."""
    width_mm: float
    height_mm: float

    @property
    def aspect_ratio(self) -> float:
        return self.width_mm / self.height_mm


@dataclass(frozen=True)
class LensSpec:
    """A cine lens, either prime (focal_length_mm) or zoom (min/max)."""
    lens_id: str
    focal_length_mm: Optional[float] = None
    focal_length_min_mm: Optional[float] = None
    focal_length_max_mm: Optional[float] = None
    max_t_stop: float = 0.0
    squeeze: float = SPHERICAL_SQUEEZE
    brand: str = ""
    series: str = ""

    @property
    def is_zoom(self) -> bool:
        return self.focal_length_min_mm is not None and self.focal_length_max_mm is not None

    @property
    def is_anamorphic(self) -> bool:
        return self.squeeze > SPHERICAL_SQUEEZE

    @property
    def name(self) -> str:
        return f"{self.brand} {self.series}".strip() or self.lens_id

    def default_focal_length(self) -> Optional[float]:
        """Focal length to start from when the lens is first selected."""
        if self.focal_length_mm is not None:
            return self.focal_length_mm
        return self.focal_length_min_mm

    def active_focal_length(self, requested_mm: Optional[float] = None) -> Optional[float]:
        """
        Focal length actually in use.

        A zoom lens follows the requested value, kept inside its range.
        A prime ignores the request unless it has no focal length at all.
        """
        if self.is_zoom:
            if requested_mm is None:
                return self.focal_length_min_mm
            return clamp(requested_mm, self.focal_length_min_mm, self.focal_length_max_mm)
        fixed = self.default_focal_length()
        return fixed if fixed is not None else requested_mm

    def focal_label(self, focal_mm: Optional[float] = None) -> str:
        """Short label, e.g. '24-70mm @ 35mm' or '50mm'."""
        if self.is_zoom:
            active = self.active_focal_length(focal_mm)
            return (f"{int(self.focal_length_min_mm)}-{int(self.focal_length_max_mm)}mm"
                    f" @ {int(active)}mm")
        fixed = self.active_focal_length(focal_mm)
        if fixed is None:
            return "?mm"
        return f"{int(fixed)}mm"

    def squeeze_label(self) -> str:
        return f"{self.squeeze:.1f}x"


@dataclass(frozen=True)
class CameraMode:
    """A recording mode of a reference camera (sensor crop + format)."""
    mode_id: str
    camera_id: str
    name: str
    sensor: SensorGeometry
    resolution: Optional[str] = None
    aspect_ratio: Optional[str] = None


@dataclass(frozen=True)
class DeviceCameraModule:
    """A physical capture module on the phone (ultra / main / tele ...)."""
    role: str
    native_hfov_degrees: float
    min_zoom: float = 1.0
    max_zoom: float = 1.0
    device_model: str = ""


@dataclass(frozen=True)
class FOVMatchResult:
    """Best module for a target FOV. zoom_factor is already clamped."""
    role: str
    zoom_factor: float
    error_radians: float


@dataclass(frozen=True)
class MatchReport:
    """Human-facing summary of a match, in degrees."""
    target_hfov_degrees: float
    achieved_hfov_degrees: float
    error_degrees: float
    role: str
    zoom_factor: float
    focal_length_mm: float
    calibration_multiplier: float = 1.0

    def summary(self) -> str:
        return (
            f"Module:        {self.role} @ {self.zoom_factor:.2f}x\n"
            f"Target HFOV:   {self.target_hfov_degrees:.2f}°\n"
            f"Achieved HFOV: {self.achieved_hfov_degrees:.2f}°\n"
            f"Error:         {self.error_degrees:.2f}°\n"
            f"Focal length:  {self.focal_length_mm:.1f}mm\n"
            f"Calibration:   x{self.calibration_multiplier:.3f}"
        )
