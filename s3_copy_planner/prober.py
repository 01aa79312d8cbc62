"""HEAD based metadata probe for a single object."""

from __future__ import annotations

import logging

from botocore.exceptions import ClientError

from .config import STANDARD_STORAGE_CLASS
from .deadline import NO_DEADLINE, Deadline
from .errors import SourceObjectNotFound
from .models import ObjectMetadata

NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def is_not_found(error: ClientError) -> bool:
    """Return True when a ClientError means the object does not exist."""
    code = str(error.response.get("Error", {}).get("Code", ""))
    return code in NOT_FOUND_CODES


class ObjectProber:  # pylint: disable=too-few-public-methods
    """Fetches size, etag, storage tier and restore state of single objects."""

    def __init__(self, s3, deadline: Deadline = NO_DEADLINE):
        self.s3 = s3
        self.deadline = deadline

    def head(self, bucket: str, key: str) -> ObjectMetadata:
        """Return the metadata of s3://bucket/key.

        Raises:
            SourceObjectNotFound: If the object does not exist.
            DeadlineExceededError: If the invocation deadline has passed.
            ClientError: For any other S3 failure.
        """
        try:
            with self.deadline.guard(f"HEAD s3://{bucket}/{key}"):
                response = self.s3.head_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if is_not_found(e):
                raise SourceObjectNotFound(bucket, key) from e
            logging.error("S3 error for s3://%s/%s: %s", bucket, key, e)
            raise
        # S3 omits StorageClass for STANDARD objects
        return ObjectMetadata(
            bucket=bucket,
            key=key,
            size=response["ContentLength"],
            etag=response["ETag"],
            storage_class=response.get("StorageClass") or STANDARD_STORAGE_CLASS,
            last_modified=response["LastModified"],
            restore=response.get("Restore"),
            archive_status=response.get("ArchiveStatus"),
        )
