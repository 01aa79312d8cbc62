"""
Storage tier thaw gate.

Finds objects that need thawing and initiates a restore, and detects objects
that are still being restored. The gate only reports "ready" once every object
is readable; until then the caller is expected to call it again after a delay.

Probe failures are logged and skipped: the copy stage has better diagnostics
for missing or unreadable objects. A failed restore request is *not* skipped,
since a permanent reason for being unable to thaw should not hide behind
endless retries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Union

from botocore.exceptions import BotoCoreError, ClientError

from .config import RESTORE_ONGOING_MARKER
from .deadline import NO_DEADLINE, Deadline
from .errors import SourceObjectNotFound, StillThawingError, ValidationError
from .models import ObjectMetadata, ThawItem
from .prober import ObjectProber
from .thaw_policy import RestoreRequest, ThawPolicy


class ThawState(Enum):
    """Where an object is in its archive/restore lifecycle."""

    ACTIVE = "active"
    ARCHIVED_IDLE = "archived-idle"
    ARCHIVED_RESTORING = "archived-restoring"
    ARCHIVED_RESTORED = "archived-restored"


@dataclass(frozen=True)
class ThawDecision:
    state: ThawState
    restore_request: Optional[RestoreRequest] = None

    @property
    def is_thawing(self) -> bool:
        return self.state in (ThawState.ARCHIVED_IDLE, ThawState.ARCHIVED_RESTORING)


@dataclass(frozen=True)
class Ready:
    """Every object is readable; items are passed through unchanged."""

    items: Sequence[Any]

    def raise_for_status(self) -> Sequence[Any]:
        return self.items


@dataclass(frozen=True)
class StillThawing:
    """Some objects are still being restored; try again later."""

    count: int
    total: int

    def raise_for_status(self) -> Sequence[Any]:
        raise StillThawingError(self.count, self.total)


GateResult = Union[Ready, StillThawing]


def classify(metadata: ObjectMetadata, policy: ThawPolicy) -> ThawDecision:
    """Decide what the gate must do for one probed object."""
    if metadata.restore:
        if RESTORE_ONGOING_MARKER in metadata.restore:
            return ThawDecision(ThawState.ARCHIVED_RESTORING)
        # e.g. ongoing-request="false", expiry-date="Sat, 02 Dec 2023 00:00:00 GMT"
        return ThawDecision(ThawState.ARCHIVED_RESTORED)
    restore_request = policy.select(metadata.storage_class, metadata.archive_status)
    if restore_request is not None:
        return ThawDecision(ThawState.ARCHIVED_IDLE, restore_request)
    return ThawDecision(ThawState.ACTIVE)


class ThawGate:
    """Issues restores for archived objects and counts objects still thawing."""

    def __init__(self, s3, deadline: Deadline = NO_DEADLINE):
        self.s3 = s3
        self.deadline = deadline
        self.prober = ObjectProber(s3, deadline)

    def _probe(self, item: ThawItem) -> Optional[ObjectMetadata]:
        try:
            return self.prober.head(item.bucket, item.key)
        except SourceObjectNotFound:
            logging.warning("Thaw check skipped missing object %s", item.location())
        except (ClientError, BotoCoreError) as e:
            logging.warning("Thaw check skipped %s after metadata error: %s", item.location(), e)
        return None

    def request_restore(self, item: ThawItem, restore_request: RestoreRequest) -> None:
        """Ask S3 to restore an archived object.

        Raises:
            ClientError: If S3 refuses the restore for any reason other than one
                already being in progress.
        """
        try:
            with self.deadline.guard(f"RESTORE {item.location()}"):
                self.s3.restore_object(
                    Bucket=item.bucket,
                    Key=item.key,
                    RestoreRequest=restore_request.to_boto(),
                )
        except ClientError as e:
            if e.response["Error"]["Code"] == "RestoreAlreadyInProgress":
                logging.info("Restore already in progress: %s", item.location())
                return
            logging.error("Restore request failed for %s: %s", item.location(), e)
            raise
        logging.info(
            "Restore requested: %s (%d day(s), tier: %s)",
            item.location(),
            restore_request.days,
            restore_request.speed,
        )

    def gate(self, items: Sequence[ThawItem], policy: ThawPolicy) -> GateResult:
        """Check every item and return Ready or StillThawing.

        Raises:
            ClientError: If a restore request fails.
            DeadlineExceededError: If the deadline passes before an S3 call.
        """
        thawing = 0
        for item in items:
            metadata = self._probe(item)
            if metadata is None:
                continue
            decision = classify(metadata, policy)
            if decision.state is ThawState.ARCHIVED_IDLE:
                self.request_restore(item, decision.restore_request)
            if decision.is_thawing:
                thawing += 1

        if thawing > 0:
            logging.info("%d/%d object(s) are in the process of thawing", thawing, len(items))
            return StillThawing(count=thawing, total=len(items))
        return Ready(items=items)


def gate_event(s3, event: dict[str, Any], deadline: Deadline = NO_DEADLINE) -> dict[str, Any]:
    """Run the thaw gate on a JSON shaped event.

    Returns the event unchanged when every object is readable.

    Raises:
        StillThawingError: If any object is still thawing (retry later).
        ValidationError: If the event or its thaw overrides are malformed.
    """
    if not isinstance(event, dict):
        raise ValidationError("Thaw event must be a JSON object")
    batch_input = event.get("BatchInput") or {}
    if not isinstance(batch_input, dict):
        raise ValidationError("Thaw BatchInput must be a JSON object")
    items = [ThawItem.from_dict(raw) for raw in event.get("Items") or []]
    policy = ThawPolicy.from_batch_input(batch_input)
    ThawGate(s3, deadline).gate(items, policy).raise_for_status()
    return event
