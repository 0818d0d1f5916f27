"""
Catalog Loader - load and validate camera / lens / device module YAML files.

The optics functions trust their inputs (positive sensor sizes and focal
lengths, ordered zoom ranges). This is where those invariants are checked.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..core.exceptions import CatalogLoadError, CatalogLookupError, CatalogValidationError
from ..optics.matching import order_modules
from ..optics.models import CameraMode, DeviceCameraModule, LensSpec, SensorGeometry
from ..utils.logging import get_catalog_logger

logger = get_catalog_logger()

DEFAULT_CATALOG_PATH = Path(__file__).parent / 'default.yaml'


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)


@dataclass
class CameraDefinition:
    """Reference cinema camera and its recording modes."""
    id: str
    brand: str = ""
    model: str = ""
    modes: List[CameraMode] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"{self.brand} {self.model}".strip() or self.id

    @classmethod
    def from_dict(cls, data: Dict) -> 'CameraDefinition':
        camera_id = str(data['id'])
        modes = []
        for i, m in enumerate(data.get('modes', []) or []):
            modes.append(CameraMode(
                mode_id=str(m.get('id', f'{camera_id}_mode_{i:02d}')),
                camera_id=camera_id,
                name=m.get('name', ''),
                sensor=SensorGeometry(
                    width_mm=float(m['sensor_width_mm']),
                    height_mm=float(m['sensor_height_mm']),
                ),
                resolution=m.get('resolution'),
                aspect_ratio=m.get('aspect_ratio'),
            ))
        return cls(
            id=camera_id,
            brand=data.get('brand', ''),
            model=data.get('model', ''),
            modes=modes,
        )


def lens_from_dict(data: Dict) -> LensSpec:
    return LensSpec(
        lens_id=str(data['id']),
        focal_length_mm=_optional_float(data.get('focal_length_mm')),
        focal_length_min_mm=_optional_float(data.get('focal_length_min_mm')),
        focal_length_max_mm=_optional_float(data.get('focal_length_max_mm')),
        max_t_stop=float(data.get('max_t_stop', 0.0)),
        squeeze=float(data.get('squeeze', 1.0)),
        brand=data.get('brand', ''),
        series=data.get('series', ''),
    )


def module_from_dict(data: Dict) -> DeviceCameraModule:
    return DeviceCameraModule(
        role=str(data['role']),
        native_hfov_degrees=float(data['native_hfov_degrees']),
        min_zoom=float(data.get('min_zoom', 1.0)),
        max_zoom=float(data.get('max_zoom', 1.0)),
        device_model=str(data.get('device', '')),
    )


@dataclass
class Catalog:
    """Complete catalog: reference cameras, lenses and phone camera modules."""
    name: str = "catalog"
    cameras: List[CameraDefinition] = field(default_factory=list)
    lenses: List[LensSpec] = field(default_factory=list)
    device_modules: List[DeviceCameraModule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: str = "catalog") -> 'Catalog':
        """Create from dictionary (YAML parsed)."""
        return cls(
            name=data.get('name', name),
            cameras=[CameraDefinition.from_dict(c) for c in data.get('cameras', []) or []],
            lenses=[lens_from_dict(l) for l in data.get('lenses', []) or []],
            device_modules=[module_from_dict(m) for m in data.get('device_modules', []) or []],
        )

    def camera(self, camera_id: str) -> CameraDefinition:
        for camera in self.cameras:
            if camera.id == camera_id:
                return camera
        raise CatalogLookupError('camera', camera_id)

    def camera_mode(self, mode_id: str) -> CameraMode:
        for camera in self.cameras:
            for mode in camera.modes:
                if mode.mode_id == mode_id:
                    return mode
        raise CatalogLookupError('camera mode', mode_id)

    def lens(self, lens_id: str) -> LensSpec:
        for lens in self.lenses:
            if lens.lens_id == lens_id:
                return lens
        raise CatalogLookupError('lens', lens_id)

    def devices(self) -> List[str]:
        return sorted({m.device_model for m in self.device_modules})

    def modules_for(self, device_model: Optional[str] = None) -> List[DeviceCameraModule]:
        """Modules of one device (all modules if None), in ultra/main/tele order."""
        if device_model is None:
            modules = list(self.device_modules)
        else:
            modules = [m for m in self.device_modules if m.device_model == device_model]
            if not modules:
                raise CatalogLookupError('device', device_model)
        return order_modules(modules)


def validate(catalog: Catalog) -> List[str]:
    """Validate geometry invariants, return list of issues."""
    issues = []

    for camera in catalog.cameras:
        for mode in camera.modes:
            if mode.sensor.width_mm <= 0 or mode.sensor.height_mm <= 0:
                issues.append(f"Camera mode {mode.mode_id} sensor dimensions must be positive")

    for lens in catalog.lenses:
        if lens.squeeze <= 0:
            issues.append(f"Lens {lens.lens_id} squeeze must be positive")
        if lens.is_zoom:
            if lens.focal_length_min_mm <= 0 or lens.focal_length_max_mm <= 0:
                issues.append(f"Lens {lens.lens_id} focal range must be positive")
            elif lens.focal_length_min_mm > lens.focal_length_max_mm:
                issues.append(f"Lens {lens.lens_id} focal range min > max")
        elif lens.default_focal_length() is None:
            issues.append(f"Lens {lens.lens_id} has no focal length")
        elif lens.default_focal_length() <= 0:
            issues.append(f"Lens {lens.lens_id} focal length must be positive")

    seen = set()
    for module in catalog.device_modules:
        key = (module.device_model, module.role)
        if key in seen:
            issues.append(f"Device {module.device_model} has duplicate role {module.role}")
        seen.add(key)
        if module.native_hfov_degrees <= 0:
            issues.append(f"Module {module.device_model}/{module.role} native HFOV must be positive")
        if module.min_zoom <= 0 or module.max_zoom <= 0:
            issues.append(f"Module {module.device_model}/{module.role} zoom range must be positive")
        elif module.min_zoom > module.max_zoom:
            issues.append(f"Module {module.device_model}/{module.role} zoom range min > max")

    return issues


class CatalogLoader:
    """Load catalogs from YAML files."""

    def __init__(self, default_path: Path = None):
        self.default_path = Path(default_path) if default_path else DEFAULT_CATALOG_PATH
        self._cache: Dict[str, Catalog] = {}

    def load_default(self) -> Catalog:
        return self.load_from_file(self.default_path)

    def load_from_file(self, path) -> Catalog:
        """Load and validate a catalog file. Results are cached per path."""
        path = Path(path)
        key = str(path.resolve())
        if key in self._cache:
            return self._cache[key]

        if not path.exists():
            raise CatalogLoadError(str(path), "file not found")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise CatalogLoadError(str(path), str(exc)) from exc

        catalog = self.load_from_dict(data, name=path.stem, source=str(path))
        self._cache[key] = catalog
        return catalog

    @staticmethod
    def load_from_dict(data: Dict[str, Any], name: str = "catalog", source: str = None) -> Catalog:
        source = source or name
        if not isinstance(data, dict):
            raise CatalogLoadError(source, "top level must be a mapping")
        for key in ('cameras', 'lenses', 'device_modules'):
            if key in data and data[key] is not None and not isinstance(data[key], list):
                raise CatalogLoadError(source, f"'{key}' must be a list")

        try:
            catalog = Catalog.from_dict(data, name=name)
        except KeyError as exc:
            raise CatalogLoadError(source, f"missing required key {exc}") from exc
        except (TypeError, ValueError, AttributeError) as exc:
            raise CatalogLoadError(source, str(exc)) from exc

        issues = validate(catalog)
        if issues:
            raise CatalogValidationError(source, issues)

        logger.info(
            f"Catalog '{catalog.name}': {len(catalog.cameras)} camera(s), "
            f"{len(catalog.lenses)} lens(es), {len(catalog.device_modules)} device module(s)"
        )
        return catalog


def load_catalog(path=None) -> Catalog:
    """Load a catalog file, or the bundled default catalog."""
    loader = CatalogLoader()
    return loader.load_from_file(path) if path else loader.load_default()


__all__ = [
    'CameraDefinition',
    'Catalog',
    'CatalogLoader',
    'DEFAULT_CATALOG_PATH',
    'lens_from_dict',
    'load_catalog',
    'module_from_dict',
    'validate',
]
