"""
Configuration - YAML settings for the scout tools.

Usage:
    config = load_config("configs/default.yaml")
    store = CalibrationFile(config.calibration.path, config.calibration.min_multiplier,
                            config.calibration.max_multiplier)
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from .constants import (
    DEFAULT_PATH_INTERVAL_MINUTES,
    MAX_MULTIPLIER,
    MIN_MULTIPLIER,
    PREFERRED_ROLE_ORDER,
)
from .core.exceptions import ConfigurationError


@dataclass
class SunConfig:
    interval_minutes: int = DEFAULT_PATH_INTERVAL_MINUTES


@dataclass
class CalibrationConfig:
    path: str = "calibration.yaml"
    min_multiplier: float = MIN_MULTIPLIER
    max_multiplier: float = MAX_MULTIPLIER


@dataclass
class MatchingConfig:
    preferred_roles: List[str] = field(default_factory=lambda: list(PREFERRED_ROLE_ORDER))
    device: Optional[str] = None


@dataclass
class ScoutConfig:
    """Complete configuration."""
    catalog_path: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None
    sun: SunConfig = field(default_factory=SunConfig)
    calibration: CalibrationConfig = field(default_factory=CalibrationConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScoutConfig':
        """Create from dictionary (YAML parsed)."""
        sun_data = data.get('sun', {}) or {}
        cal_data = data.get('calibration', {}) or {}
        match_data = data.get('matching', {}) or {}
        log_data = data.get('logging', {}) or {}
        catalog_data = data.get('catalog', {}) or {}

        return cls(
            catalog_path=catalog_data.get('path'),
            log_level=str(log_data.get('level', 'INFO')),
            log_file=log_data.get('file'),
            sun=SunConfig(
                interval_minutes=int(sun_data.get('interval_minutes', DEFAULT_PATH_INTERVAL_MINUTES)),
            ),
            calibration=CalibrationConfig(
                path=str(cal_data.get('path', 'calibration.yaml')),
                min_multiplier=float(cal_data.get('min_multiplier', MIN_MULTIPLIER)),
                max_multiplier=float(cal_data.get('max_multiplier', MAX_MULTIPLIER)),
            ),
            matching=MatchingConfig(
                preferred_roles=[str(r) for r in match_data.get('preferred_roles', PREFERRED_ROLE_ORDER)],
                device=match_data.get('device'),
            ),
        )

    def validate(self) -> List[str]:
        """Validate config, return list of issues."""
        issues = []
        if self.sun.interval_minutes <= 0:
            issues.append("sun.interval_minutes must be positive")
        if self.calibration.min_multiplier <= 0:
            issues.append("calibration.min_multiplier must be positive")
        if self.calibration.min_multiplier > self.calibration.max_multiplier:
            issues.append("calibration.min_multiplier must not exceed max_multiplier")
        if not (self.calibration.min_multiplier <= 1.0 <= self.calibration.max_multiplier):
            issues.append("calibration range must include 1.0")
        return issues


def _validate_config(source: str, data) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config '{source}' must be a mapping.")
    for key in ('sun', 'calibration', 'matching', 'logging', 'catalog'):
        if key in data and data[key] is not None and not isinstance(data[key], dict):
            raise ConfigurationError(f"Config '{source}' key '{key}' must be a mapping.")
    return data


def load_config(path=None) -> ScoutConfig:
    """Load configuration from YAML; defaults when no path is given."""
    if path is None:
        return ScoutConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Config '{path}' could not be read: {exc}") from exc

    data = _validate_config(str(path), loaded)
    try:
        config = ScoutConfig.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Config '{path}' has an invalid value: {exc}") from exc

    issues = config.validate()
    if issues:
        raise ConfigurationError(
            f"Config '{path}' validation failed:\n" + "\n".join(f"  - {i}" for i in issues)
        )
    return config
