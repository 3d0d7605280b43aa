"""Exception hierarchy for Custodian.

Every error carries a human readable ``message`` and a ``details`` dict so
callers (CLI, logs, tests) can render or match on structured context.
"""

from __future__ import annotations

from typing import Any


class CustodianException(Exception):
    """Base exception for all Custodian errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging or CLI output."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CustodianException):
    """Input failed validation."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field


class ConfigException(CustodianException):
    """Configuration is missing or invalid."""

    def __init__(self, message: str, setting: str | None = None) -> None:
        super().__init__(message, {"setting": setting} if setting else None)
        self.setting = setting


class NotFoundError(CustodianException):
    """A requested resource does not exist."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            {"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(CustodianException):
    """A write collided with existing state."""

    pass


# =============================================================================
# DOMAIN ERRORS
# =============================================================================


class NotAuthorizedError(CustodianException):
    """Caller is not allowed to perform the operation."""

    def __init__(self, message: str, caller: Any = None) -> None:
        super().__init__(message, {"caller": str(caller)} if caller is not None else None)
        self.caller = caller


class NameNotFoundError(NotFoundError):
    """No address is registered under the name."""

    def __init__(self, name: str) -> None:
        super().__init__("Named address", name)
        self.name = name


class DuplicateNameError(ConflictError):
    """The name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Name already registered: {name}", {"name": name})
        self.name = name


class AlreadyInitializedError(ConflictError):
    """A record already exists at the storage location."""

    def __init__(self, location: Any, resource_type: str) -> None:
        super().__init__(
            f"{resource_type} already exists at {location}",
            {"location": str(location), "resource_type": resource_type},
        )
        self.location = location
        self.resource_type = resource_type
