"""Custodian Core - Shared primitives: errors, configuration, logging."""

from .config import CustodianConfig, get_config, reset_config
from .exceptions import (
    AlreadyInitializedError,
    ConfigException,
    ConflictError,
    CustodianException,
    DuplicateNameError,
    NameNotFoundError,
    NotAuthorizedError,
    NotFoundError,
    ValidationException,
)
from .logging import JSONFormatter, configure_logging, get_logger

__all__ = [
    # Config
    "CustodianConfig",
    "get_config",
    "reset_config",
    # Exceptions
    "CustodianException",
    "ValidationException",
    "ConfigException",
    "NotFoundError",
    "ConflictError",
    "NotAuthorizedError",
    "NameNotFoundError",
    "DuplicateNameError",
    "AlreadyInitializedError",
    # Logging
    "JSONFormatter",
    "configure_logging",
    "get_logger",
]
