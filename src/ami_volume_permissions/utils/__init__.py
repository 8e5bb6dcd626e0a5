# utils/__init__.py

from .config import AccessConfig, ConfigManager
from .session import SessionManager, validate_region
from .logger import set_log_level, setup_logger
from .reporter import ProgressReporter
from .exceptions import (
    AmiPermissionsError,
    ParseError,
    ConfigurationError,
    FetchError,
    NoSnapshotDevicesError,
    SyncError,
)

__all__ = [
    "AccessConfig",
    "ConfigManager",
    "SessionManager",
    "validate_region",
    "setup_logger",
    "set_log_level",
    "ProgressReporter",
    "AmiPermissionsError",
    "ParseError",
    "ConfigurationError",
    "FetchError",
    "NoSnapshotDevicesError",
    "SyncError",
]
