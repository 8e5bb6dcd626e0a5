# utils/logger.py
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

from ami_volume_permissions.core.constants import (
    DEFAULT_LOG_DIR,
    LOG_BACKUP_COUNT,
    LOG_ROTATION_MAX_BYTES,
    PACKAGE_LOGGER_NAME,
)

# Set by set_log_level, wins over per-call levels and LOG_LEVEL
_level_override: Optional[str] = None


def _in_package(name: str) -> bool:
    return name == PACKAGE_LOGGER_NAME or name.startswith(PACKAGE_LOGGER_NAME + ".")


def _apply_level(logger: logging.Logger, level: str) -> None:
    value = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(value)
    for handler in logger.handlers:
        # File handlers always take DEBUG
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(value)


def set_log_level(level: Optional[str]) -> None:
    """Set the level of every package logger, existing and future.

    ``None`` clears the override; loggers created afterwards fall back to
    their own level or LOG_LEVEL.
    """
    global _level_override
    _level_override = level
    if level is None:
        return

    for name, existing in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(existing, logging.Logger) and _in_package(name):
            _apply_level(existing, level)


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Optional[str] = None,
    enable_rotation: bool = True,
    max_bytes: int = LOG_ROTATION_MAX_BYTES,
    backup_count: int = LOG_BACKUP_COUNT,
) -> logging.Logger:
    """Setup logger with stderr output and an optional rotating log file.

    Level falls back to the LOG_LEVEL environment variable, log files are
    written under LOG_PATH (default ``logs``). Console output goes to stderr
    so stdout only carries command output.
    """
    logger = logging.getLogger(name)
    if _level_override and _in_package(name):
        level = _level_override
    level = level or os.environ.get("LOG_LEVEL", "INFO")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Prevent duplicate handlers
    if not logger.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Console handler for immediate feedback
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(logging.INFO)
        logger.addHandler(stream_handler)

        if log_file:
            logs_dir = Path(os.environ.get("LOG_PATH", DEFAULT_LOG_DIR))
            log_path = logs_dir / log_file

            try:
                logs_dir.mkdir(parents=True, exist_ok=True)
                if enable_rotation:
                    file_handler = logging.handlers.RotatingFileHandler(
                        log_path,
                        maxBytes=max_bytes,
                        backupCount=backup_count,
                        encoding="utf-8",
                    )
                else:
                    file_handler = logging.FileHandler(log_path, encoding="utf-8")

                file_handler.setFormatter(formatter)
                file_handler.setLevel(logging.DEBUG)  # All levels to file
                logger.addHandler(file_handler)

            except (OSError, PermissionError) as e:
                # Fallback: log to console if file creation fails
                logger.warning(
                    f"Failed to create log file {log_path}: {e}. Logging to console only."
                )

        # Prevent propagation to root logger to avoid duplicate messages
        logger.propagate = False

    if _level_override and _in_package(name):
        _apply_level(logger, _level_override)

    return logger
