"""
Input validation for a resolution batch.

All rules here are rules that will *always* fail for the same input, so the
whole batch is checked before any S3 call is made and the first defect aborts it.
"""

from __future__ import annotations

from typing import Sequence

from .errors import (
    ConflictingFolderKeysError,
    DestinationFolderKeyFieldInvalid,
    DestinationRelativeFolderKeyFieldInvalid,
    MaximumExpansionFieldInvalid,
    SourceBucketFieldInvalid,
    SourceKeyFieldInvalid,
    SourceRootFolderKeyFieldInvalid,
)
from .models import BatchInput, SourceItem

PARENT_SEGMENT = ".."


def _describe(index: int, item: SourceItem) -> str:
    return f"item {index} ({item.location()})"


def validate_destination_folder_key(destination_folder_key) -> None:
    """Check the batch level destination folder.

    The empty string is valid and means the root of the destination bucket.

    Raises:
        DestinationFolderKeyFieldInvalid: If the key is not a slash terminated string.
    """
    if not isinstance(destination_folder_key, str):
        raise DestinationFolderKeyFieldInvalid(
            "destinationFolderKey must be a slash terminated string or the empty string"
        )
    if destination_folder_key and not destination_folder_key.endswith("/"):
        raise DestinationFolderKeyFieldInvalid(
            "destinationFolderKey must be a slash terminated string or the empty string"
        )
    if PARENT_SEGMENT in destination_folder_key:
        raise DestinationFolderKeyFieldInvalid(
            "destinationFolderKey cannot contain '..' (which may be interpreted by some systems as a relative path access)"
        )


def validate_maximum_expansion(maximum_expansion) -> None:
    # bool is an int subclass but never a sensible ceiling
    if isinstance(maximum_expansion, bool) or not isinstance(maximum_expansion, int) or maximum_expansion <= 0:
        raise MaximumExpansionFieldInvalid("maximumExpansion must be an integer greater than zero")


def _validate_relative_folder_key(index: int, item: SourceItem) -> None:
    value = item.destination_relative_folder_key
    if not isinstance(value, str):
        raise DestinationRelativeFolderKeyFieldInvalid(
            f"{_describe(index, item)}: destinationRelativeFolderKey must be a string"
        )
    if not value.endswith("/"):
        raise DestinationRelativeFolderKeyFieldInvalid(
            f"{_describe(index, item)}: if present, destinationRelativeFolderKey must have a trailing slash"
        )
    if value.startswith("/"):
        raise DestinationRelativeFolderKeyFieldInvalid(
            f"{_describe(index, item)}: destinationRelativeFolderKey cannot be an absolute path that starts with a slash"
        )
    if PARENT_SEGMENT in value:
        raise DestinationRelativeFolderKeyFieldInvalid(
            f"{_describe(index, item)}: destinationRelativeFolderKey cannot contain '..'"
        )


def _validate_source_root_folder_key(index: int, item: SourceItem) -> None:
    value = item.source_root_folder_key
    if not isinstance(value, str):
        raise SourceRootFolderKeyFieldInvalid(f"{_describe(index, item)}: sourceRootFolderKey must be a string")
    if not value.endswith("/"):
        raise SourceRootFolderKeyFieldInvalid(
            f"{_describe(index, item)}: if present, sourceRootFolderKey must have a trailing slash"
        )
    if PARENT_SEGMENT in value:
        raise SourceRootFolderKeyFieldInvalid(f"{_describe(index, item)}: sourceRootFolderKey cannot contain '..'")
    if not item.source_key.startswith(value):
        raise SourceRootFolderKeyFieldInvalid(
            f"{_describe(index, item)}: if present, sourceRootFolderKey must be a leading portion of the sourceKey"
        )


def validate_item(index: int, item: SourceItem) -> None:
    """Check a single copy instruction.

    Raises:
        ValidationError: One of the field specific subclasses on the first defect found.
    """
    if not isinstance(item.source_bucket, str) or not item.source_bucket:
        raise SourceBucketFieldInvalid(f"item {index}: sourceBucket must be specified as a string")
    if not isinstance(item.source_key, str) or not item.source_key:
        raise SourceKeyFieldInvalid(
            f"item {index} (bucket {item.source_bucket}): sourceKey must be specified as a string"
        )
    if PARENT_SEGMENT in item.source_key:
        raise SourceKeyFieldInvalid(
            f"{_describe(index, item)}: sourceKey cannot contain '..' which may be interpreted "
            "by some systems as a relative path access"
        )
    if "." in item.source_key.split("/"):
        raise SourceKeyFieldInvalid(f"{_describe(index, item)}: sourceKey cannot contain a '.' path segment")
    if item.source_key.endswith("/"):
        raise SourceKeyFieldInvalid(
            f"{_describe(index, item)}: sourceKey must name an object or end with the folder wildcard '/*', "
            "not end with a slash"
        )
    if item.source_root_folder_key is not None and item.destination_relative_folder_key is not None:
        raise ConflictingFolderKeysError(
            f"{_describe(index, item)}: sourceRootFolderKey and destinationRelativeFolderKey "
            "cannot both be specified for a single source item"
        )
    if item.destination_relative_folder_key is not None:
        _validate_relative_folder_key(index, item)
    if item.source_root_folder_key is not None:
        _validate_source_root_folder_key(index, item)


def validate_batch(batch_input: BatchInput, items: Sequence[SourceItem]) -> None:
    """Validate the batch settings and every item before any I/O happens.

    Raises:
        ValidationError: On the first structural defect in the batch.
    """
    validate_destination_folder_key(batch_input.destination_folder_key)
    validate_maximum_expansion(batch_input.maximum_expansion)
    for index, item in enumerate(items):
        validate_item(index, item)
