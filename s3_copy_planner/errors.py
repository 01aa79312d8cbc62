"""
Error types raised while planning an S3 copy.

Every terminal error names the offending s3://bucket/key so the bad input line
can be found without re-running with verbose tracing.
"""

from __future__ import annotations


class CopyPlannerError(RuntimeError):
    """Base class for all planner errors."""

    retryable = False


class ValidationError(CopyPlannerError):
    """Structural input defect. Never retried."""


class DestinationFolderKeyFieldInvalid(ValidationError):
    """Raised when the batch destinationFolderKey breaks the slash/traversal rules."""


class MaximumExpansionFieldInvalid(ValidationError):
    """Raised when the batch maximumExpansion is not a positive integer."""


class SourceBucketFieldInvalid(ValidationError):
    """Raised when an item has no usable sourceBucket."""


class SourceKeyFieldInvalid(ValidationError):
    """Raised when an item has no usable sourceKey."""


class ConflictingFolderKeysError(ValidationError):
    """Raised when sourceRootFolderKey and destinationRelativeFolderKey are both set."""


class DestinationRelativeFolderKeyFieldInvalid(ValidationError):
    """Raised when destinationRelativeFolderKey breaks the slash/traversal rules."""


class SourceRootFolderKeyFieldInvalid(ValidationError):
    """Raised when sourceRootFolderKey is not a slash terminated lead of sourceKey."""


class WildcardItemInvalid(ValidationError):
    """Raised when a wildcard item also sets fields that only apply to single objects."""


class InvalidThawParamsError(ValidationError):
    """Raised when a thaw days/speed override is not acceptable to S3."""


class CopyInstructionsError(ValidationError):
    """Raised when a copy instructions file cannot be parsed."""


class SourceObjectNotFound(CopyPlannerError):
    """Raised when a directly named source object does not exist."""

    def __init__(self, bucket: str, key: str):
        self.bucket = bucket
        self.key = key
        super().__init__(f"Object s3://{bucket}/{key} does not exist or is not accessible")


class SourceKeyNotAnObjectError(CopyPlannerError):
    """Raised when a resolved key cannot be given a destination, e.g. a non-empty "folder/" entry."""

    def __init__(self, bucket: str, key: str, reason: str):
        self.bucket = bucket
        self.key = key
        super().__init__(f"Object s3://{bucket}/{key} cannot be copied: {reason}")


class WildcardExpansionMaximumError(CopyPlannerError):
    """Raised when a wildcard expands to more objects than the safety ceiling allows."""

    def __init__(self, bucket: str, key: str, maximum: int):
        self.bucket = bucket
        self.key = key
        self.maximum = maximum
        super().__init__(
            f"Expanding s3://{bucket}/{key} resulted in a number of objects "
            f"that exceeds our safety limit of {maximum}"
        )


class WildcardExpansionEmptyError(CopyPlannerError):
    """Raised when a wildcard expands to no objects at all."""

    def __init__(self, bucket: str, key: str):
        self.bucket = bucket
        self.key = key
        super().__init__(f"Expanding s3://{bucket}/{key} resulted in no objects")


class StillThawingError(CopyPlannerError):
    """Raised when objects are still being restored; call the thaw gate again later."""

    retryable = True

    def __init__(self, count: int, total: int):
        self.count = count
        self.total = total
        super().__init__(f"{count}/{total} are in the process of thawing")


class DeadlineExceededError(CopyPlannerError):
    """Raised when the invocation deadline expires before a network call."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Deadline exceeded at {operation}")


class DestinationWrongRegionError(CopyPlannerError):
    """Raised when the destination bucket lives outside the required region."""


class DestinationAccessDeniedError(CopyPlannerError):
    """Raised when the destination bucket refuses our marker object."""
