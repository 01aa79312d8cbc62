"""
Restore parameters per archival tier.

Each archival tier maps to (days, speed). Defaults apply per field whenever the
caller does not supply an override.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .config import DEFAULT_THAW_DAYS, DEFAULT_THAW_SPEED
from .errors import InvalidThawParamsError

# S3 storage classes / archive statuses
GLACIER = "GLACIER"
DEEP_ARCHIVE = "DEEP_ARCHIVE"
INTELLIGENT_TIERING = "INTELLIGENT_TIERING"
ARCHIVE_ACCESS = "ARCHIVE_ACCESS"
DEEP_ARCHIVE_ACCESS = "DEEP_ARCHIVE_ACCESS"

# Tier names as used in the thaw BatchInput field names
GLACIER_FLEXIBLE_RETRIEVAL_TIER = "glacierFlexibleRetrieval"
GLACIER_DEEP_ARCHIVE_TIER = "glacierDeepArchive"
INTELLIGENT_TIERING_ARCHIVE_TIER = "intelligentTieringArchive"
INTELLIGENT_TIERING_DEEP_ARCHIVE_TIER = "intelligentTieringDeepArchive"

FLEXIBLE_ALLOWED_SPEEDS = frozenset({"Bulk", "Standard", "Expedited"})
DEEP_ALLOWED_SPEEDS = frozenset({"Bulk", "Standard"})

ALLOWED_SPEEDS: dict[str, frozenset[str]] = {
    GLACIER_FLEXIBLE_RETRIEVAL_TIER: FLEXIBLE_ALLOWED_SPEEDS,
    GLACIER_DEEP_ARCHIVE_TIER: DEEP_ALLOWED_SPEEDS,
    INTELLIGENT_TIERING_ARCHIVE_TIER: FLEXIBLE_ALLOWED_SPEEDS,
    INTELLIGENT_TIERING_DEEP_ARCHIVE_TIER: DEEP_ALLOWED_SPEEDS,
}


@dataclass(frozen=True)
class RestoreRequest:
    """How long a restored copy should live and how fast to produce it."""

    days: int
    speed: str

    def to_boto(self) -> dict:
        return {"Days": self.days, "GlacierJobParameters": {"Tier": self.speed}}


DEFAULT_RESTORE_REQUESTS: dict[str, RestoreRequest] = {
    GLACIER_FLEXIBLE_RETRIEVAL_TIER: RestoreRequest(DEFAULT_THAW_DAYS, DEFAULT_THAW_SPEED),
    GLACIER_DEEP_ARCHIVE_TIER: RestoreRequest(DEFAULT_THAW_DAYS, "Standard"),
    INTELLIGENT_TIERING_ARCHIVE_TIER: RestoreRequest(DEFAULT_THAW_DAYS, DEFAULT_THAW_SPEED),
    INTELLIGENT_TIERING_DEEP_ARCHIVE_TIER: RestoreRequest(DEFAULT_THAW_DAYS, "Standard"),
}


def archival_tier(storage_class: Optional[str], archive_status: Optional[str] = None) -> Optional[str]:
    """Return the policy tier of an object, or None if it is directly readable.

    GLACIER_IR and INTELLIGENT_TIERING objects without an archive status are
    readable without a restore.
    """
    if storage_class == GLACIER:
        return GLACIER_FLEXIBLE_RETRIEVAL_TIER
    if storage_class == DEEP_ARCHIVE:
        return GLACIER_DEEP_ARCHIVE_TIER
    if storage_class == INTELLIGENT_TIERING:
        if archive_status == ARCHIVE_ACCESS:
            return INTELLIGENT_TIERING_ARCHIVE_TIER
        if archive_status == DEEP_ARCHIVE_ACCESS:
            return INTELLIGENT_TIERING_DEEP_ARCHIVE_TIER
    return None


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_thaw_params(params: Mapping[str, Any]) -> None:
    """Reject thaw overrides S3 would refuse.

    Deep archive tiers only support Bulk and Standard retrieval.

    Raises:
        InvalidThawParamsError: On the first unacceptable days or speed value.
    """
    for tier, allowed in ALLOWED_SPEEDS.items():
        speed = params.get(f"{tier}ThawSpeed")
        if speed is not None and speed not in allowed:
            raise InvalidThawParamsError(
                f'Invalid thaw params: {tier}ThawSpeed="{speed}". Allowed: {"|".join(sorted(allowed))}'
            )
        days = params.get(f"{tier}ThawDays")
        if days is not None and not _is_positive_int(days):
            raise InvalidThawParamsError(f"Invalid thaw params: {tier}ThawDays must be a positive integer, got {days!r}")


@dataclass(frozen=True)
class ThawPolicy:
    """Per call restore settings for every archival tier."""

    overrides: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_batch_input(cls, batch_input: Optional[Mapping[str, Any]]) -> "ThawPolicy":
        """Build a policy from ``<tier>ThawDays`` / ``<tier>ThawSpeed`` fields.

        Raises:
            InvalidThawParamsError: If any supplied override is unacceptable.
        """
        batch_input = batch_input or {}
        validate_thaw_params(batch_input)
        overrides = {}
        for tier in DEFAULT_RESTORE_REQUESTS:
            tier_overrides = {}
            if batch_input.get(f"{tier}ThawDays") is not None:
                tier_overrides["days"] = batch_input[f"{tier}ThawDays"]
            if batch_input.get(f"{tier}ThawSpeed") is not None:
                tier_overrides["speed"] = batch_input[f"{tier}ThawSpeed"]
            if tier_overrides:
                overrides[tier] = tier_overrides
        return cls(overrides=overrides)

    def select(self, storage_class: Optional[str], archive_status: Optional[str] = None) -> Optional[RestoreRequest]:
        """Return the restore request for an object, or None if no restore is needed."""
        tier = archival_tier(storage_class, archive_status)
        if tier is None:
            return None
        default = DEFAULT_RESTORE_REQUESTS[tier]
        tier_overrides = self.overrides.get(tier, {})
        return RestoreRequest(
            days=tier_overrides.get("days", default.days),
            speed=tier_overrides.get("speed", default.speed),
        )
