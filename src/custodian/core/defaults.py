"""Centralized defaults for Custodian.

Environment overrides are read by ``custodian.core.config``; these are the
values used when nothing is set.
"""

from __future__ import annotations

# Authority handles
DEFAULT_AUTHORITY_TTL_SECONDS = 300
MAX_AUTHORITY_TTL_SECONDS = 3600  # 1 hour

# Resource account derivation
DEFAULT_PACKAGE_SEED = "custodian"

# Logging
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# Environment variable names
ENV_PREFIX = "CUSTODIAN_"
ENV_DEPLOYER = ENV_PREFIX + "DEPLOYER"
ENV_PACKAGE_SEED = ENV_PREFIX + "PACKAGE_SEED"
ENV_AUTHORITY_TTL_SECONDS = ENV_PREFIX + "AUTHORITY_TTL_SECONDS"
ENV_LOG_LEVEL = ENV_PREFIX + "LOG_LEVEL"
ENV_LOG_JSON = ENV_PREFIX + "LOG_JSON"
