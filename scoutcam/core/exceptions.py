"""
Custom Exception Classes for the scout camera toolkit.

The numeric engines never raise: "no match" and "no sunrise" are returned as
None. These types cover the glue around them (config, catalog, calibration
files) where a failure really is an error.
"""


class ScoutError(Exception):
    """Base exception for all scoutcam errors."""
    pass


class ConfigurationError(ScoutError):
    """Errors related to configuration files."""
    pass


class CatalogError(ScoutError):
    """Errors related to camera / lens / device module catalogs."""
    pass


class CatalogLoadError(CatalogError):
    """Raised when a catalog YAML file cannot be loaded."""

    def __init__(self, source: str, message: str = None):
        self.source = source
        msg = f"Failed to load catalog '{source}'"
        if message:
            msg += f": {message}"
        super().__init__(msg)


class CatalogValidationError(CatalogError):
    """Raised when catalog entries violate geometry invariants."""

    def __init__(self, source: str, issues: list):
        self.source = source
        self.issues = issues
        msg = f"Catalog '{source}' validation failed:\n"
        msg += "\n".join(f"  - {issue}" for issue in issues)
        super().__init__(msg)


class CatalogLookupError(CatalogError):
    """Raised when a camera mode, lens or device is not in the catalog."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"Unknown {kind} '{key}'")


class CalibrationError(ScoutError):
    """Errors related to FOV calibration multipliers."""
    pass


class CalibrationStorageError(CalibrationError):
    """Raised when a calibration file cannot be read or written."""

    def __init__(self, path: str, message: str = None):
        self.path = path
        msg = f"Calibration file '{path}' is unusable"
        if message:
            msg += f": {message}"
        super().__init__(msg)
