"""Rendering of verification outcomes into HTTP responses.

This is the only place error classes become text and status codes.
"""

from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse

from ..application.dtos import VerifyResponseDTO
from ..domain.entities import VerificationOutcome
from ..domain.errors import (
    FutureTimestampError,
    MalformedSignatureError,
    MissingTimestampError,
    SignatureExpiredError,
    SignatureRecoveryError,
    TypedDataError,
    VerificationError,
)


def render_error(error: VerificationError) -> str:
    """Return the stable, code-prefixed message for a verification failure."""
    if isinstance(error, SignatureExpiredError):
        return f"E007: expired (age={error.age} max={error.max_age})"
    if isinstance(error, FutureTimestampError):
        return f"E008: future ts={error.timestamp} now={error.now}"
    if isinstance(error, MissingTimestampError):
        return "E009: missing timestamp"
    if isinstance(error, TypedDataError):
        return f"E010: typed data error: {error.detail}"
    if isinstance(error, MalformedSignatureError):
        return f"E011: bad signature: {error.detail}"
    if isinstance(error, SignatureRecoveryError):
        return f"E012: signature recovery failed: {error.detail}"
    raise TypeError(f"Unhandled verification error: {type(error).__name__}")


def status_for(error: VerificationError) -> int:
    """Malformed input is a client error; policy rejections are a normal 200."""
    if isinstance(error, (TypedDataError, MalformedSignatureError)):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_200_OK


def outcome_to_dto(outcome: VerificationOutcome) -> VerifyResponseDTO:
    if outcome.error is None:
        return VerifyResponseDTO(
            is_valid=True, recovered_address=outcome.recovered_address
        )
    return VerifyResponseDTO(is_valid=False, error=render_error(outcome.error))


def verify_response(status_code: int, dto: VerifyResponseDTO) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=dto.model_dump(by_alias=True))


def outcome_response(outcome: VerificationOutcome) -> JSONResponse:
    status_code = (
        status.HTTP_200_OK if outcome.error is None else status_for(outcome.error)
    )
    return verify_response(status_code, outcome_to_dto(outcome))


def rejection_response(status_code: int, message: str) -> JSONResponse:
    """Response for requests that never reached the verifier."""
    return verify_response(status_code, VerifyResponseDTO(is_valid=False, error=message))
