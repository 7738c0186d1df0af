"""Logger setup for the firmware sanity checker."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def setup_logger(
    name: str = "fsc",
    log_file: Optional[str] = None,
    max_bytes: int = 1 * 1024 * 1024,  # 1MB, nvram/tmp space is small
    backup_count: int = 1,
    level: int = logging.INFO,
) -> logging.Logger:
    """Setup logger writing to stderr or, if given, an append-mode log file.

    Args:
        name: Logger name
        log_file: Optional path to log file (appended to, created if missing)
        max_bytes: Max size before rotation
        backup_count: Number of rotated files to keep
        level: Logging level

    Returns:
        Configured logger instance

    Note:
        If the log file can't be opened the logger falls back to stderr
        and records a warning; this never raises.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers if already configured
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler: Optional[logging.Handler] = None
    fallback_error: Optional[Exception] = None
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_file,
                mode="a",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            fallback_error = e

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if fallback_error is not None:
        logger.warning(
            f"Unable to open log file {log_file}: {fallback_error}, logging to stderr"
        )

    return logger
