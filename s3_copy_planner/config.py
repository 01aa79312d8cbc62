"""
Configuration for the S3 copy planner.

Constants describe S3 conventions the planner relies on. Operator defaults can
be overridden through environment variables.
"""

from __future__ import annotations

import os
from typing import Optional

# Storage class reported by HEAD/List is omitted for STANDARD objects
STANDARD_STORAGE_CLASS: str = "STANDARD"

# A sourceKey ending with this suffix means "every object under this folder"
WILDCARD_SUFFIX: str = "/*"

# Restore header value while a restore is still running
RESTORE_ONGOING_MARKER: str = 'ongoing-request="true"'

# Thaw defaults when no override is supplied
DEFAULT_THAW_DAYS: int = 1
DEFAULT_THAW_SPEED: str = "Bulk"

# Operator defaults (overridable via environment)
DEFAULT_MAXIMUM_EXPANSION: int = 1000
DEFAULT_DEADLINE_SECONDS: Optional[float] = None

# botocore client settings
CONNECT_TIMEOUT_SECONDS: int = 10
READ_TIMEOUT_SECONDS: int = 30
MAX_ATTEMPTS: int = 5

# Body of the marker object written by the destination write check
WRITE_CHECK_BODY: str = (
    "A file created by the copy planner to ensure correct permissions "
    "and to indicate the start of the copy process"
)

MAXIMUM_EXPANSION_ENV = "S3_COPY_PLANNER_MAXIMUM_EXPANSION"
DEADLINE_SECONDS_ENV = "S3_COPY_PLANNER_DEADLINE_SECONDS"
REGION_ENV = "S3_COPY_PLANNER_REGION"


class ConfigurationError(RuntimeError):
    """Raised when an environment override cannot be used."""


def get_maximum_expansion_default() -> int:
    """Return the wildcard safety ceiling used when the caller does not give one.

    Raises:
        ConfigurationError: If the environment override is not a positive integer.
    """
    raw = os.environ.get(MAXIMUM_EXPANSION_ENV)
    if raw is None or raw == "":
        return DEFAULT_MAXIMUM_EXPANSION
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{MAXIMUM_EXPANSION_ENV} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{MAXIMUM_EXPANSION_ENV} must be greater than zero")
    return value


def get_deadline_seconds_default() -> Optional[float]:
    """Return the invocation deadline in seconds, or None for no deadline.

    Raises:
        ConfigurationError: If the environment override is not a positive number.
    """
    raw = os.environ.get(DEADLINE_SECONDS_ENV)
    if raw is None or raw == "":
        return DEFAULT_DEADLINE_SECONDS
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{DEADLINE_SECONDS_ENV} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{DEADLINE_SECONDS_ENV} must be greater than zero")
    return value


def get_region_default() -> Optional[str]:
    """Return the region override for the S3 client, if any."""
    return os.environ.get(REGION_ENV) or None
