"""Domain-specific exceptions.

Every way a verification can fail is one of the classes below. They carry only
the values needed to describe the failure; turning them into text and HTTP
status codes happens in ``paygate_verifier.api.responses``.
"""

from __future__ import annotations


class VerificationError(Exception):
    """Base class for all verification failures."""


class TimestampError(VerificationError):
    """Raised when the claimed signing time falls outside the accepted window."""


class MissingTimestampError(TimestampError):
    """Raised when the payment context carries no timestamp."""

    def __init__(self) -> None:
        super().__init__("missing timestamp")


class FutureTimestampError(TimestampError):
    """Raised when the timestamp is further in the future than the skew allows."""

    def __init__(self, timestamp: int, now: int) -> None:
        super().__init__(f"timestamp {timestamp} is ahead of now {now}")
        self.timestamp = timestamp
        self.now = now


class SignatureExpiredError(TimestampError):
    """Raised when the signature is older than the maximum age."""

    def __init__(self, age: int, max_age: int) -> None:
        super().__init__(f"signature age {age}s exceeds {max_age}s")
        self.age = age
        self.max_age = max_age


class TypedDataError(VerificationError):
    """Raised when the EIP-712 payload cannot be built from the context."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class MalformedSignatureError(VerificationError):
    """Raised when the signature string is not 65 bytes of hex."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class SignatureRecoveryError(VerificationError):
    """Raised when a well-formed signature does not recover to a public key."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail
