"""FastAPI dependencies for the verifier API."""

from __future__ import annotations

import time
from typing import Callable

from fastapi import Depends, Request

from ..application.signature_verifier import SignatureVerifier
from ..application.timestamp_validator import TimestampPolicy
from ..env import Settings
from ..middleware.correlation import UNKNOWN_CORRELATION_ID

Clock = Callable[[], int]


def system_clock() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_clock() -> Clock:
    """Get the clock used to read ``now`` once per request."""
    return system_clock


def get_correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", UNKNOWN_CORRELATION_ID)


def get_signature_verifier(
    settings: Settings = Depends(get_settings),
) -> SignatureVerifier:
    """Get signature verifier."""
    return SignatureVerifier(
        TimestampPolicy(
            max_age=settings.signature_expiry_seconds,
            max_skew=settings.signature_clock_skew_seconds,
        )
    )
