# =============================================================================
# livestock_core/logging/config.py
# Logging setup for the client core and its worker threads
# =============================================================================

import logging
import sys
import time
from datetime import date
from pathlib import Path
from typing import Optional, Union

from livestock_core.errors.exceptions import LivestockError

# Store operations run on a thread pool, so the thread name is part of every line
LOG_FORMAT = "%(asctime)s | %(threadName)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_DIR = Path("logs")

# Third-party loggers that only matter when something goes wrong
NOISY_LOGGERS = ("urllib3", "requests", "streamlit")


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_to_file: bool = True,
    log_filename: Optional[str] = None,
) -> None:
    """
    Configure logging for a Streamlit page or script using the client core.

    Args:
        level: Level number or name ("DEBUG", "info", ...)
        log_to_file: Also write to ``LOG_DIR``
        log_filename: File name inside ``LOG_DIR`` (default: livestock_YYYY-MM-DD.log)
    """
    if isinstance(level, str):
        name, level = level, logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        filename = log_filename or f"livestock_{date.today():%Y-%m-%d}.log"
        handlers.append(logging.FileHandler(LOG_DIR / filename, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, handlers=handlers, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("livestock_core").info(f"Logging initialized at {logging.getLevelName(level)}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Times one store or service operation.

    Backend rejections (``LivestockError``) are expected outcomes and are
    logged at WARNING without a traceback; anything else is logged at ERROR
    with one. Exceptions are never suppressed.

    Usage:
        with LogContext(logger, "animals: fetch_all") as op:
            gateway.list()
        op.elapsed  # seconds
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.elapsed: Optional[float] = None
        self._started: Optional[float] = None

    def __enter__(self) -> "LogContext":
        self._started = time.perf_counter()
        self.logger.info(f"{self.operation}... started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.elapsed = time.perf_counter() - self._started

        if exc_type is None:
            self.logger.info(f"{self.operation}... completed ({self.elapsed:.2f}s)")
        elif isinstance(exc_val, LivestockError):
            self.logger.warning(f"{self.operation}... failed ({self.elapsed:.2f}s): {exc_val}")
        else:
            self.logger.error(f"{self.operation}... failed ({self.elapsed:.2f}s): {exc_val}", exc_info=True)
        return False

