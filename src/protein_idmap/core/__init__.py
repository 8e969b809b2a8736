"""Shared infrastructure: logging, errors and the HTTP client."""

from .exceptions import ConfigurationError, MappingTableError, ProteinIdMapError, ServiceError
from .logger import LogConfig, LogFormat, UnifiedLogger, configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "LogConfig",
    "LogFormat",
    "MappingTableError",
    "ProteinIdMapError",
    "ServiceError",
    "UnifiedLogger",
    "configure_logging",
    "get_logger",
]
