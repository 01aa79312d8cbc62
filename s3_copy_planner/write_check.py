"""Destination writability probe run before any copy is planned."""

from __future__ import annotations

import logging

from botocore.exceptions import ClientError

from .config import WRITE_CHECK_BODY
from .deadline import NO_DEADLINE, Deadline
from .errors import DestinationAccessDeniedError, DestinationFolderKeyFieldInvalid, DestinationWrongRegionError


def check_can_write(
    s3,
    bucket: str,
    destination_folder_key: str,
    relative_key: str,
    deadline: Deadline = NO_DEADLINE,
) -> str:
    """Write a small marker object into the destination and return its key.

    The client should be created in the region the destination is required to
    be in, so a bucket elsewhere answers with a PermanentRedirect.

    Raises:
        DestinationFolderKeyFieldInvalid: If the folder key lacks a trailing slash.
        DestinationWrongRegionError: If the bucket is in another region.
        DestinationAccessDeniedError: If the put is refused.
        ClientError: For any other S3 failure.
    """
    if destination_folder_key and not destination_folder_key.endswith("/"):
        raise DestinationFolderKeyFieldInvalid(
            "The destination folder key must either be an empty string or a string with a trailing slash"
        )
    key = f"{destination_folder_key}{relative_key}"
    try:
        with deadline.guard(f"PUT s3://{bucket}/{key}"):
            s3.put_object(Bucket=bucket, Key=key, Body=WRITE_CHECK_BODY.encode("utf-8"))
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        if error_code == "PermanentRedirect":
            raise DestinationWrongRegionError(
                f"S3 put to s3://{bucket}/{key} failed because the bucket is in the wrong region"
            ) from e
        if error_code == "AccessDenied":
            raise DestinationAccessDeniedError(f"S3 put to s3://{bucket}/{key} failed with access denied") from e
        raise
    logging.info("Destination writable: s3://%s/%s", bucket, key)
    return key
