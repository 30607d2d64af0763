"""
ModulePush Utilities Package.

Configuration, logging and error types shared across all modules.
Requires Python 3.11+.
"""

from utils.config import Settings, get_settings
from utils.errors import (
    CollectionError,
    ModulePushError,
    NotificationSubsystemError,
    StartupError,
    TransportError,
    UploadRejectedError,
)
from utils.logger import configure_logging, get_logger, logger, LoggerMixin

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "logger",
    "LoggerMixin",
    "ModulePushError",
    "StartupError",
    "NotificationSubsystemError",
    "CollectionError",
    "TransportError",
    "UploadRejectedError",
]
