"""Data models for copy instructions, probed metadata and resolved objects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from .config import STANDARD_STORAGE_CLASS
from .errors import ValidationError


def format_iso_timestamp(value: datetime) -> str:
    """Render a timestamp as UTC ISO-8601 with millisecond precision and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    rendered = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return rendered.replace("+00:00", "Z")


def _require_mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValidationError(f"{what} must be a JSON object")
    return value


@dataclass
class SourceItem:
    """One line of copy instructions: a single object or a folder wildcard.

    Field values are kept exactly as supplied so the validator can reject
    wrongly typed input instead of silently coercing it.
    """

    source_bucket: Any
    source_key: Any
    source_root_folder_key: Optional[str] = None
    destination_relative_folder_key: Optional[str] = None
    sums: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "SourceItem":
        data = _require_mapping(data, "Each copy instruction item")
        return cls(
            source_bucket=data.get("sourceBucket"),
            source_key=data.get("sourceKey"),
            source_root_folder_key=data.get("sourceRootFolderKey"),
            destination_relative_folder_key=data.get("destinationRelativeFolderKey"),
            sums=data.get("sums"),
        )

    def location(self) -> str:
        return f"s3://{self.source_bucket}/{self.source_key}"


@dataclass
class BatchInput:
    """Settings shared by every item of one resolution call."""

    destination_folder_key: Any
    maximum_expansion: Any

    @classmethod
    def from_dict(cls, data: Any) -> "BatchInput":
        data = _require_mapping(data, "BatchInput")
        return cls(
            destination_folder_key=data.get("destinationFolderKey"),
            maximum_expansion=data.get("maximumExpansion"),
        )


@dataclass(frozen=True)
class ObjectMetadata:
    """The HEAD details of a single object."""

    bucket: str
    key: str
    size: int
    etag: str
    storage_class: str
    last_modified: datetime
    restore: Optional[str] = None
    archive_status: Optional[str] = None


@dataclass(frozen=True)
class RawListing:
    """A single entry from a paginated object listing."""

    key: str
    etag: str
    size: int
    last_modified: datetime
    storage_class: Optional[str] = None


@dataclass(frozen=True)
class ResolvedObject:
    """A concrete object with its computed destination, ready for the copy stage."""

    source_bucket: str
    source_key: str
    destination_key: str
    storage_class: str
    size: int
    etag: str
    last_modified_iso_string: str
    sums: Optional[str] = None

    @classmethod
    def from_metadata(
        cls,
        metadata: ObjectMetadata,
        destination_key: str,
        sums: Optional[str] = None,
    ) -> "ResolvedObject":
        return cls(
            source_bucket=metadata.bucket,
            source_key=metadata.key,
            destination_key=destination_key,
            storage_class=metadata.storage_class or STANDARD_STORAGE_CLASS,
            size=metadata.size,
            etag=metadata.etag,
            last_modified_iso_string=format_iso_timestamp(metadata.last_modified),
            sums=sums,
        )

    @classmethod
    def from_listing(cls, bucket: str, listing: RawListing, destination_key: str) -> "ResolvedObject":
        # expanded objects never carry asserted checksums
        return cls(
            source_bucket=bucket,
            source_key=listing.key,
            destination_key=destination_key,
            storage_class=listing.storage_class or STANDARD_STORAGE_CLASS,
            size=listing.size,
            etag=listing.etag,
            last_modified_iso_string=format_iso_timestamp(listing.last_modified),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "sourceBucket": self.source_bucket,
            "sourceKey": self.source_key,
            "destinationKey": self.destination_key,
            "storageClass": self.storage_class,
            "size": self.size,
            "etag": self.etag,
            "lastModifiedISOString": self.last_modified_iso_string,
        }
        if self.sums is not None:
            result["sums"] = self.sums
        return result


@dataclass(frozen=True)
class ThawItem:
    """A bucket/key pair handed to the thaw gate."""

    bucket: str
    key: str

    @classmethod
    def from_dict(cls, data: Any) -> "ThawItem":
        data = _require_mapping(data, "Each thaw item")
        bucket = data.get("bucket")
        key = data.get("key")
        if not isinstance(bucket, str) or not bucket:
            raise ValidationError("Each thaw item must specify bucket as a string")
        if not isinstance(key, str) or not key:
            raise ValidationError(f"Thaw item in bucket {bucket} must specify key as a string")
        return cls(bucket=bucket, key=key)

    def location(self) -> str:
        return f"s3://{self.bucket}/{self.key}"
