"""
Logging Module for the scout camera toolkit.

Provides centralized, configurable logging with:
- Console and file handlers
- Structured log format
- Component-specific loggers (optics, sun, calibration, catalog)
- Timing decorator and context manager
"""

import logging
import sys
from functools import wraps
from pathlib import Path
from typing import Optional
import time


class LogColors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors level and logger name for terminals."""

    LEVEL_COLORS = {
        logging.DEBUG: LogColors.GRAY,
        logging.INFO: LogColors.GREEN,
        logging.WARNING: LogColors.YELLOW,
        logging.ERROR: LogColors.RED,
        logging.CRITICAL: LogColors.RED + LogColors.BOLD,
    }

    def __init__(self, fmt: str = None, datefmt: str = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record):
        if not self.use_colors:
            return super().format(record)
        # Color a copy so file handlers sharing the record stay plain
        record = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, LogColors.RESET)
        record.levelname = f"{color}{record.levelname}{LogColors.RESET}"
        record.name = f"{LogColors.CYAN}{record.name}{LogColors.RESET}"
        return super().format(record)


class ScoutLogger:
    """Owns the ``scoutcam`` logger hierarchy and its handlers."""

    _instance = None
    _initialized = False

    ROOT_LOGGER = "scoutcam"

    LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    DATE_FORMAT = "%H:%M:%S"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if ScoutLogger._initialized:
            return
        ScoutLogger._initialized = True

        self.root_logger = logging.getLogger(self.ROOT_LOGGER)
        self.root_logger.addHandler(logging.NullHandler())
        self._file_handler = None
        self._console_handler = None

    def setup(
        self,
        level: int = logging.INFO,
        log_file: Optional[Path] = None,
        console: bool = True,
        use_colors: bool = True,
    ):
        """
        Configure logging.

        Args:
            level: Minimum log level (logging.DEBUG, INFO, etc.)
            log_file: Optional file path for persistent logs
            console: Enable console output (stderr, so CLI stdout stays clean)
            use_colors: Use colored console output
        """
        for handler in list(self.root_logger.handlers):
            self.root_logger.removeHandler(handler)
            if handler is self._file_handler:
                handler.close()
        self._file_handler = None
        self._console_handler = None

        if console:
            self._console_handler = logging.StreamHandler(sys.stderr)
            self._console_handler.setLevel(level)
            self._console_handler.setFormatter(
                ColoredFormatter(self.LOG_FORMAT, self.DATE_FORMAT, use_colors)
            )
            self.root_logger.addHandler(self._console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            self._file_handler = logging.FileHandler(log_file, encoding='utf-8')
            self._file_handler.setLevel(logging.DEBUG)
            self._file_handler.setFormatter(
                logging.Formatter(self.LOG_FORMAT, self.DATE_FORMAT)
            )
            self.root_logger.addHandler(self._file_handler)

        if not self.root_logger.handlers:
            self.root_logger.addHandler(logging.NullHandler())

        # The file handler records everything regardless of console level
        self.root_logger.setLevel(logging.DEBUG if log_file else level)

    def get_logger(self, name: str) -> logging.Logger:
        """Get a named logger under the scoutcam hierarchy."""
        if not name.startswith(self.ROOT_LOGGER):
            name = f"{self.ROOT_LOGGER}.{name}"
        return logging.getLogger(name)


_logger_manager = ScoutLogger()


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True,
    use_colors: bool = True,
):
    """Setup logging for scoutcam."""
    _logger_manager.setup(level, log_file, console, use_colors)


def parse_level(level) -> int:
    """Accept 'debug' / 'INFO' / logging.WARNING and return the numeric level."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def get_logger(name: str) -> logging.Logger:
    """Get a component logger."""
    return _logger_manager.get_logger(name)


def get_optics_logger() -> logging.Logger:
    return get_logger("optics")


def get_sun_logger() -> logging.Logger:
    return get_logger("sun")


def get_calibration_logger() -> logging.Logger:
    return get_logger("calibration")


def get_catalog_logger() -> logging.Logger:
    return get_logger("catalog")


def timed(logger: logging.Logger = None, level: int = logging.DEBUG):
    """Decorator to log function execution time."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed = (time.perf_counter() - start) * 1000  # ms

            log = logger or get_logger("timing")
            log.log(level, f"{func.__name__} completed in {elapsed:.2f}ms")

            return result
        return wrapper
    return decorator


class TimedBlock:
    """Context manager for timing code blocks."""

    def __init__(self, name: str, logger: logging.Logger = None, level: int = logging.DEBUG):
        self.name = name
        self.logger = logger or get_logger("timing")
        self.level = level
        self.start = None
        self.elapsed_ms = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed_ms = (time.perf_counter() - self.start) * 1000
        self.logger.log(self.level, f"{self.name} completed in {self.elapsed_ms:.2f}ms")
