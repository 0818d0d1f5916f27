"""
FOV calibration multipliers.

A multiplier corrects a module's manufacturer HFOV for the real device
(nominal 1.0, adjustable by +/-5%). CalibrationStore is the in-memory owner of
those values; CalibrationFile persists them per device in YAML.

Usage:
    store = CalibrationFile("calibration.yaml").load("iPhone15,3")
    store.set_multiplier(1.02, "ultra")
    match = match_module(target, modules, store.snapshot())
"""

import math
import threading
from pathlib import Path
from typing import Dict, Iterable, Optional

import yaml

from ..constants import DEFAULT_MULTIPLIER, MIN_MULTIPLIER, MAX_MULTIPLIER
from ..core.exceptions import CalibrationError, CalibrationStorageError
from ..utils.logging import get_calibration_logger
from ..utils.math_utils import clamp

logger = get_calibration_logger()


class CalibrationStore:
    """Per-role multipliers for one device. Unset roles read as 1.0."""

    def __init__(self, multipliers: Optional[Dict[str, float]] = None,
                 min_multiplier: float = MIN_MULTIPLIER,
                 max_multiplier: float = MAX_MULTIPLIER):
        self.min_multiplier = min_multiplier
        self.max_multiplier = max_multiplier
        self._lock = threading.Lock()
        # Stored values are trusted as-is, only new writes are range-limited
        self._multipliers: Dict[str, float] = {
            str(role): float(value) for role, value in (multipliers or {}).items()
        }

    def multiplier(self, role: str) -> float:
        with self._lock:
            return self._multipliers.get(role, DEFAULT_MULTIPLIER)

    def set_multiplier(self, value: float, role: str) -> float:
        """Store a multiplier, clamped into the calibration range. Returns the stored value."""
        value = float(value)
        if not math.isfinite(value):
            raise CalibrationError(f"Multiplier for '{role}' must be a finite number, got {value}")
        stored = clamp(value, self.min_multiplier, self.max_multiplier)
        if stored != value:
            logger.warning(
                f"Multiplier {value} for '{role}' outside "
                f"[{self.min_multiplier}, {self.max_multiplier}], clamped to {stored}"
            )
        with self._lock:
            self._multipliers[role] = stored
        logger.debug(f"Calibration '{role}' set to {stored:.4f}")
        return stored

    def reset_multiplier(self, role: str):
        with self._lock:
            self._multipliers.pop(role, None)
        logger.debug(f"Calibration '{role}' reset")

    def reset_all(self, roles: Iterable[str]):
        with self._lock:
            for role in roles:
                self._multipliers.pop(role, None)

    def snapshot(self) -> Dict[str, float]:
        """Point-in-time copy to hand to one matching query."""
        with self._lock:
            return dict(self._multipliers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._multipliers)

    def __repr__(self) -> str:
        return f"CalibrationStore({self.snapshot()!r})"


class CalibrationFile:
    """
    YAML persistence for calibration stores, keyed by device hardware id.

    File layout:
        devices:
          iPhone15,3:
            ultra: 1.02
            tele: 0.98
    """

    def __init__(self, path, min_multiplier: float = MIN_MULTIPLIER,
                 max_multiplier: float = MAX_MULTIPLIER):
        self.path = Path(path)
        self.min_multiplier = min_multiplier
        self.max_multiplier = max_multiplier

    def _read_devices(self) -> Dict[str, Dict[str, float]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise CalibrationStorageError(str(self.path), str(exc)) from exc

        if not isinstance(data, dict):
            raise CalibrationStorageError(str(self.path), "top level must be a mapping")
        devices = data.get('devices', {}) or {}
        if not isinstance(devices, dict):
            raise CalibrationStorageError(str(self.path), "'devices' must be a mapping")

        parsed = {}
        for hardware_id, roles in devices.items():
            if not isinstance(roles, dict):
                raise CalibrationStorageError(
                    str(self.path), f"device '{hardware_id}' must map roles to multipliers"
                )
            try:
                parsed[str(hardware_id)] = {str(r): float(v) for r, v in roles.items()}
            except (TypeError, ValueError) as exc:
                raise CalibrationStorageError(
                    str(self.path), f"device '{hardware_id}': {exc}"
                ) from exc
            bad = [r for r, v in parsed[str(hardware_id)].items() if not math.isfinite(v)]
            if bad:
                raise CalibrationStorageError(
                    str(self.path), f"device '{hardware_id}': non-finite multiplier for {', '.join(bad)}"
                )
        return parsed

    def devices(self) -> Dict[str, Dict[str, float]]:
        return self._read_devices()

    def load(self, hardware_id: str) -> CalibrationStore:
        multipliers = self._read_devices().get(hardware_id, {})
        logger.info(f"Loaded {len(multipliers)} calibration value(s) for '{hardware_id}'")
        return CalibrationStore(multipliers, self.min_multiplier, self.max_multiplier)

    def save(self, store: CalibrationStore, hardware_id: str):
        """Write one device's multipliers, keeping other devices untouched."""
        devices = self._read_devices()
        devices[hardware_id] = store.snapshot()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                yaml.safe_dump({'devices': devices}, f, default_flow_style=False, sort_keys=True)
        except OSError as exc:
            raise CalibrationStorageError(str(self.path), str(exc)) from exc
        logger.info(f"Saved calibration for '{hardware_id}' to {self.path}")
