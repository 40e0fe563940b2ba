"""Pure validation of the claimed signing time.

These functions never read the clock: ``now`` is always passed in, so they can
be tested in isolation with arbitrary windows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain.errors import (
    FutureTimestampError,
    MissingTimestampError,
    SignatureExpiredError,
)

U64_MAX = 2**64 - 1

DEFAULT_MAX_AGE_SECONDS = 300
DEFAULT_MAX_SKEW_SECONDS = 60


def validate_timestamp(
    timestamp: Optional[int],
    max_age: int,
    max_skew: int,
    now: int,
) -> None:
    """Validate a signing timestamp against the freshness window. Pure function.

    Args:
        timestamp: Unix seconds claimed by the signer, or None if absent
        max_age: Oldest accepted signature, in seconds (inclusive)
        max_skew: How far ahead of ``now`` a timestamp may be, in seconds (inclusive)
        now: Current Unix time in seconds

    Raises:
        MissingTimestampError: If no timestamp was supplied.
        FutureTimestampError: If the timestamp is beyond ``now + max_skew``.
        SignatureExpiredError: If the timestamp is older than ``max_age``.
    """
    if timestamp is None:
        raise MissingTimestampError()

    if timestamp > min(now + max_skew, U64_MAX):
        raise FutureTimestampError(timestamp=timestamp, now=now)

    age = max(now - timestamp, 0)
    if age > max_age:
        raise SignatureExpiredError(age=age, max_age=max_age)


@dataclass(frozen=True)
class TimestampPolicy:
    """Freshness window applied to every signature."""

    max_age: int = DEFAULT_MAX_AGE_SECONDS
    max_skew: int = DEFAULT_MAX_SKEW_SECONDS

    def validate(self, timestamp: Optional[int], now: int) -> None:
        validate_timestamp(timestamp, self.max_age, self.max_skew, now)
