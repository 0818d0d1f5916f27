"""
Pytest Configuration and Shared Fixtures

This module provides common fixtures used across all test categories:
- Unit tests
- Integration tests
- Regression tests
"""

import logging
import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict

import yaml

# Ensure project root is in path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# OPTICS FIXTURES
# =============================================================================

@pytest.fixture
def iphone_modules():
    """Ultra / main / tele modules of a typical three-camera phone."""
    from scoutcam.optics.models import DeviceCameraModule

    return [
        DeviceCameraModule(role="ultra", native_hfov_degrees=108.3, min_zoom=1.0, max_zoom=2.0,
                           device_model="test-phone"),
        DeviceCameraModule(role="main", native_hfov_degrees=73.7, min_zoom=1.0, max_zoom=6.0,
                           device_model="test-phone"),
        DeviceCameraModule(role="tele", native_hfov_degrees=26.3, min_zoom=1.0, max_zoom=5.0,
                           device_model="test-phone"),
    ]


@pytest.fixture
def super35_sensor():
    from scoutcam.optics.models import SensorGeometry
    return SensorGeometry(width_mm=24.88, height_mm=14.0)


@pytest.fixture
def prime_lens():
    from scoutcam.optics.models import LensSpec
    return LensSpec(lens_id="prime-50", focal_length_mm=50.0, max_t_stop=1.5,
                    brand="ZEISS", series="Supreme Prime")


@pytest.fixture
def zoom_lens():
    from scoutcam.optics.models import LensSpec
    return LensSpec(lens_id="zoom-24-290", focal_length_min_mm=24.0, focal_length_max_mm=290.0,
                    max_t_stop=2.8, brand="Angenieux", series="Optimo 24-290")


@pytest.fixture
def anamorphic_lens():
    from scoutcam.optics.models import LensSpec
    return LensSpec(lens_id="ana-40", focal_length_mm=40.0, max_t_stop=2.0, squeeze=2.0,
                    brand="Atlas", series="Orion Anamorphic")


@pytest.fixture
def calibration_store():
    from scoutcam.optics.calibration import CalibrationStore
    return CalibrationStore()


# =============================================================================
# SUN FIXTURES
# =============================================================================

@pytest.fixture
def greenwich_equator():
    from scoutcam.sun.models import GeoCoordinate
    return GeoCoordinate(latitude=0.0, longitude=0.0)


@pytest.fixture
def london():
    from scoutcam.sun.models import GeoCoordinate
    return GeoCoordinate(latitude=51.5074, longitude=-0.1278)


@pytest.fixture
def march_equinox_2024() -> datetime:
    return datetime(2024, 3, 20, tzinfo=timezone.utc)


# =============================================================================
# CATALOG / CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def catalog_dict() -> Dict:
    """Small valid catalog as parsed YAML."""
    return {
        'name': 'test',
        'cameras': [
            {
                'id': 'cam-a',
                'brand': 'ARRI',
                'model': 'ALEXA 35',
                'modes': [
                    {'id': 'cam-a-og', 'name': 'Open Gate', 'sensor_width_mm': 27.99,
                     'sensor_height_mm': 19.22, 'aspect_ratio': '3:2'},
                ],
            },
        ],
        'lenses': [
            {'id': 'prime-32', 'brand': 'Cooke', 'series': 'S4/i', 'focal_length_mm': 32,
             'max_t_stop': 2.0},
            {'id': 'zoom-28-100', 'brand': 'Fujinon', 'series': 'Premista',
             'focal_length_min_mm': 28, 'focal_length_max_mm': 100, 'max_t_stop': 2.9},
        ],
        'device_modules': [
            {'device': 'phone-x', 'role': 'tele', 'native_hfov_degrees': 26.3,
             'min_zoom': 1.0, 'max_zoom': 5.0},
            {'device': 'phone-x', 'role': 'main', 'native_hfov_degrees': 73.7,
             'min_zoom': 1.0, 'max_zoom': 6.0},
            {'device': 'phone-x', 'role': 'ultra', 'native_hfov_degrees': 108.3,
             'min_zoom': 1.0, 'max_zoom': 2.0},
        ],
    }


@pytest.fixture
def catalog_file(tmp_path, catalog_dict) -> Path:
    path = tmp_path / 'catalog.yaml'
    path.write_text(yaml.safe_dump(catalog_dict), encoding='utf-8')
    return path


@pytest.fixture
def write_yaml(tmp_path):
    """Write a mapping to a YAML file under tmp_path and return its path."""
    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding='utf-8')
        return path
    return _write


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers a test (or the CLI) attached to the scoutcam logger."""
    yield
    from scoutcam.utils.logging import setup_logging
    setup_logging(console=False)
    logging.getLogger("scoutcam").setLevel(logging.NOTSET)


# =============================================================================
# PYTEST HOOKS
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: CLI and end-to-end tests")
    config.addinivalue_line("markers", "regression: Determinism and reference-value tests")


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        path = str(item.path)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        elif "regression" in path:
            item.add_marker(pytest.mark.regression)
