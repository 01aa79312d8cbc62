"""Invocation deadline checked before every network call."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Optional

from botocore.exceptions import ConnectTimeoutError, ReadTimeoutError

from .errors import DeadlineExceededError


@dataclass
class Deadline:
    """An absolute point in monotonic time after which no new S3 call is started."""

    expires_at: Optional[float] = None
    clock: Callable[[], float] = time.monotonic

    @classmethod
    def after(cls, seconds: Optional[float], clock: Callable[[], float] = time.monotonic) -> "Deadline":
        """Create a deadline `seconds` from now. None means unbounded."""
        if seconds is None:
            return cls(expires_at=None, clock=clock)
        return cls(expires_at=clock() + seconds, clock=clock)

    def remaining(self) -> Optional[float]:
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - self.clock())

    def expired(self) -> bool:
        return self.expires_at is not None and self.clock() >= self.expires_at

    def check(self, operation: str) -> None:
        """Raise DeadlineExceededError if the deadline has passed.

        Raises:
            DeadlineExceededError: When called after expiry.
        """
        if self.expired():
            raise DeadlineExceededError(operation)

    @contextmanager
    def guard(self, operation: str):
        """Wrap one S3 call: check before it starts, and turn a timeout past expiry into a deadline error.

        Raises:
            DeadlineExceededError: If the deadline passed before the call, or the
                call timed out after the deadline passed.
        """
        self.check(operation)
        try:
            yield
        except (ConnectTimeoutError, ReadTimeoutError) as exc:
            if self.expired():
                raise DeadlineExceededError(operation) from exc
            raise


NO_DEADLINE = Deadline()
