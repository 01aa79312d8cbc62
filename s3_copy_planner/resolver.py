"""
Resolution of copy instructions into a sorted list of concrete objects.

Wildcard items are expanded from the listing (which already carries the
metadata we need), every other item is probed with HEAD. Any error aborts the
whole resolution; no partial result is ever returned.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from .deadline import NO_DEADLINE, Deadline
from .destination import compute_destination_key
from .errors import SourceKeyNotAnObjectError, ValidationError
from .expander import WildcardExpander, check_wildcard_item, is_wildcard_key, wildcard_prefix
from .models import BatchInput, ResolvedObject, SourceItem
from .prober import ObjectProber
from .validation import validate_batch


def order_resolved(objects: Iterable[ResolvedObject]) -> list[ResolvedObject]:
    """Sort by destination key; equal keys keep their discovery order.

    Duplicates (the same object named directly and found by a wildcard) are kept.
    """
    return sorted(objects, key=lambda resolved: resolved.destination_key)


class CopyPlanner:
    """Turns validated copy instructions into destination annotated objects."""

    def __init__(self, s3, deadline: Deadline = NO_DEADLINE):
        self.s3 = s3
        self.deadline = deadline
        self.prober = ObjectProber(s3, deadline)
        self.expander = WildcardExpander(s3, deadline)

    @staticmethod
    def _destination_key(
        bucket: str,
        key: str,
        root: Optional[str],
        batch_input: BatchInput,
        relative_folder_key: Optional[str],
    ) -> str:
        try:
            return compute_destination_key(key, root, batch_input.destination_folder_key, relative_folder_key)
        except ValueError as exc:
            raise SourceKeyNotAnObjectError(bucket, key, str(exc)) from exc

    def _expand_item(self, item: SourceItem, batch_input: BatchInput) -> list[ResolvedObject]:
        check_wildcard_item(item)
        prefix = wildcard_prefix(item.source_key)
        return [
            ResolvedObject.from_listing(
                item.source_bucket,
                listing,
                self._destination_key(
                    item.source_bucket,
                    listing.key,
                    prefix,
                    batch_input,
                    item.destination_relative_folder_key,
                ),
            )
            for listing in self.expander.expand(item.source_bucket, prefix, batch_input.maximum_expansion)
        ]

    def _probe_item(self, item: SourceItem, batch_input: BatchInput) -> ResolvedObject:
        metadata = self.prober.head(item.source_bucket, item.source_key)
        return ResolvedObject.from_metadata(
            metadata,
            self._destination_key(
                item.source_bucket,
                item.source_key,
                item.source_root_folder_key,
                batch_input,
                item.destination_relative_folder_key,
            ),
            sums=item.sums,
        )

    def resolve(self, batch_input: BatchInput, items: Sequence[SourceItem]) -> list[ResolvedObject]:
        """Validate, expand and probe every item and return the sorted result.

        Raises:
            ValidationError: If any item is malformed (before any S3 call).
            SourceObjectNotFound: If a directly named object does not exist.
            SourceKeyNotAnObjectError: If a listed key cannot be given a destination.
            WildcardExpansionMaximumError: If a wildcard exceeds maximumExpansion.
            WildcardExpansionEmptyError: If a wildcard matches nothing.
            DeadlineExceededError: If the deadline passes before an S3 call.
            ClientError | BotoCoreError: For other upstream failures.
        """
        validate_batch(batch_input, items)

        resolved: list[ResolvedObject] = []
        direct_items: list[SourceItem] = []
        for item in items:
            if is_wildcard_key(item.source_key):
                expanded = self._expand_item(item, batch_input)
                logging.debug("Expanded %s into %d object(s)", item.location(), len(expanded))
                resolved.extend(expanded)
            else:
                direct_items.append(item)

        for item in direct_items:
            resolved.append(self._probe_item(item, batch_input))

        logging.info("Resolved %d instruction(s) into %d object(s)", len(items), len(resolved))
        return order_resolved(resolved)


def resolve_event(s3, event: dict[str, Any], deadline: Deadline = NO_DEADLINE) -> list[dict[str, Any]]:
    """Run a resolution call on a JSON shaped event and return JSON shaped output.

    Raises:
        ValidationError: If the event itself is malformed.
    """
    if not isinstance(event, dict):
        raise ValidationError("Resolution event must be a JSON object")
    batch_input = BatchInput.from_dict(event.get("BatchInput"))
    items = [SourceItem.from_dict(raw) for raw in event.get("Items") or []]
    planner = CopyPlanner(s3, deadline)
    return [resolved.to_dict() for resolved in planner.resolve(batch_input, items)]
