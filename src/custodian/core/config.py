"""Environment-driven configuration.

Usage:
    from custodian.core.config import get_config

    config = get_config()
    ttl = config.authority_ttl_seconds
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .defaults import (
    DEFAULT_AUTHORITY_TTL_SECONDS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PACKAGE_SEED,
    ENV_AUTHORITY_TTL_SECONDS,
    ENV_DEPLOYER,
    ENV_LOG_JSON,
    ENV_LOG_LEVEL,
    ENV_PACKAGE_SEED,
    LOG_LEVELS,
    MAX_AUTHORITY_TTL_SECONDS,
)
from .exceptions import ConfigException, ValidationException

if TYPE_CHECKING:
    from ..identity.address import AccountAddress

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CustodianConfig:
    """Runtime settings.

    Attributes:
        deployer: Deployer account, if configured. Hex literals are parsed
            into an ``AccountAddress`` on construction.
        package_seed: Seed used to derive the controlled resource account.
        authority_ttl_seconds: Lifetime of materialized authority handles.
        log_level: Root level for ``configure_logging``.
        log_json: Emit JSON lines instead of plain text.
    """

    deployer: AccountAddress | None = None
    package_seed: str = DEFAULT_PACKAGE_SEED
    authority_ttl_seconds: int = DEFAULT_AUTHORITY_TTL_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = False

    def __post_init__(self) -> None:
        if not 0 < self.authority_ttl_seconds <= MAX_AUTHORITY_TTL_SECONDS:
            raise ConfigException(
                f"authority_ttl_seconds must be in (0, {MAX_AUTHORITY_TTL_SECONDS}], "
                f"got {self.authority_ttl_seconds}",
                setting=ENV_AUTHORITY_TTL_SECONDS,
            )

        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigException(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}",
                setting=ENV_LOG_LEVEL,
            )
        object.__setattr__(self, "log_level", level)

        if self.deployer is not None:
            from ..identity.address import AccountAddress

            try:
                deployer = AccountAddress.coerce(self.deployer)
            except ValidationException as e:
                raise ConfigException(
                    f"deployer is not a valid address: {e.message}",
                    setting=ENV_DEPLOYER,
                ) from e
            object.__setattr__(self, "deployer", deployer)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CustodianConfig:
        """Build a config from ``CUSTODIAN_*`` environment variables."""
        env = os.environ if environ is None else environ

        raw_ttl = env.get(ENV_AUTHORITY_TTL_SECONDS, str(DEFAULT_AUTHORITY_TTL_SECONDS))
        try:
            ttl = int(raw_ttl)
        except ValueError as e:
            raise ConfigException(
                f"{ENV_AUTHORITY_TTL_SECONDS} must be an integer, got {raw_ttl!r}",
                setting=ENV_AUTHORITY_TTL_SECONDS,
            ) from e

        return cls(
            deployer=env.get(ENV_DEPLOYER) or None,
            package_seed=env.get(ENV_PACKAGE_SEED, DEFAULT_PACKAGE_SEED),
            authority_ttl_seconds=ttl,
            log_level=env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            log_json=env.get(ENV_LOG_JSON, "").strip().lower() in _TRUTHY,
        )


_config: CustodianConfig | None = None


def get_config() -> CustodianConfig:
    """Get the process-wide config, loading it from the environment once."""
    global _config
    if _config is None:
        _config = CustodianConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next ``get_config`` re-reads the environment."""
    global _config
    _config = None
