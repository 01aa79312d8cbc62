"""Folder wildcard expansion into concrete object listings."""

from __future__ import annotations

from typing import Iterator

from .config import WILDCARD_SUFFIX
from .deadline import NO_DEADLINE, Deadline
from .errors import WildcardExpansionEmptyError, WildcardExpansionMaximumError, WildcardItemInvalid
from .models import RawListing, SourceItem


def is_wildcard_key(source_key: str) -> bool:
    """Return True when the key names every object below a folder."""
    return source_key.endswith(WILDCARD_SUFFIX)


def wildcard_prefix(source_key: str) -> str:
    """Return the slash terminated folder a wildcard key refers to ("a/b/*" -> "a/b/")."""
    return source_key[:-1]


def is_directory_marker(key: str, size: int) -> bool:
    return size == 0 and key.endswith("/")


def check_wildcard_item(item: SourceItem) -> None:
    """Reject fields that cannot apply to every object of a wildcard.

    Raises:
        WildcardItemInvalid: If sourceRootFolderKey or sums are set on a wildcard.
    """
    if item.source_root_folder_key is not None:
        raise WildcardItemInvalid(
            f"{item.location()}: cannot specify both a wildcard folder for a source and the sourceRootFolderKey"
        )
    if item.sums is not None:
        raise WildcardItemInvalid(
            f"{item.location()}: cannot specify both a wildcard folder and a sums field "
            "as checksums will not apply to all the expanded files"
        )


class WildcardExpander:  # pylint: disable=too-few-public-methods
    """Lists every object under a prefix, bounded by a safety ceiling."""

    def __init__(self, s3, deadline: Deadline = NO_DEADLINE):
        self.s3 = s3
        self.deadline = deadline

    def _get_page_contents(self, bucket: str, page: dict) -> list[dict]:
        """Extract object listings from a paginator page, validating key counts."""
        contents = page.get("Contents")
        key_count = page.get("KeyCount")
        if contents is None:
            if key_count not in (None, 0):
                raise RuntimeError(
                    f"list_objects_v2 missing Contents while reporting {key_count} keys"
                    f" for bucket {bucket}"
                )
            return []
        return contents

    def _pages(self, bucket: str, prefix: str) -> Iterator[dict]:
        paginator = self.s3.get_paginator("list_objects_v2")
        pages = iter(paginator.paginate(Bucket=bucket, Prefix=prefix))
        while True:
            # each page is a separate request
            with self.deadline.guard(f"LIST s3://{bucket}/{prefix}"):
                page = next(pages, None)
            if page is None:
                return
            yield page

    def expand(self, bucket: str, prefix: str, max_count: int) -> Iterator[RawListing]:
        """Yield every real object under s3://bucket/prefix.

        Zero byte folder markers are skipped before counting, so a tree holding
        only folder markers counts as empty.

        Raises:
            WildcardExpansionMaximumError: As soon as more than max_count objects are seen.
            WildcardExpansionEmptyError: If the listing held no real objects.
        """
        expansion_count = 0
        for page in self._pages(bucket, prefix):
            for obj in self._get_page_contents(bucket, page):
                key = obj["Key"]
                size = obj["Size"]
                if is_directory_marker(key, size):
                    continue
                expansion_count += 1
                if expansion_count > max_count:
                    raise WildcardExpansionMaximumError(bucket, prefix + "*", max_count)
                yield RawListing(
                    key=key,
                    etag=obj["ETag"],
                    size=size,
                    last_modified=obj["LastModified"],
                    storage_class=obj.get("StorageClass"),
                )
        if expansion_count == 0:
            raise WildcardExpansionEmptyError(bucket, prefix + "*")
