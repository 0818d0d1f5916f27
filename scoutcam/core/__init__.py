"""
Core module - shared error types.
"""

from .exceptions import (
    ScoutError,
    ConfigurationError,
    CatalogError,
    CatalogLoadError,
    CatalogValidationError,
    CatalogLookupError,
    CalibrationError,
    CalibrationStorageError,
)

__all__ = [
    'ScoutError',
    'ConfigurationError',
    'CatalogError',
    'CatalogLoadError',
    'CatalogValidationError',
    'CatalogLookupError',
    'CalibrationError',
    'CalibrationStorageError',
]
