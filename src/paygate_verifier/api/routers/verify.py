"""Signature verification API route."""

from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from ...application.dtos import VerifyRequestDTO, VerifyResponseDTO
from ...application.signature_verifier import SignatureVerifier
from ...env import Settings
from ..dependencies import (
    Clock,
    get_clock,
    get_correlation_id,
    get_settings,
    get_signature_verifier,
)
from ..responses import outcome_response, rejection_response, render_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["verify"])


verify_requests_total = Counter(
    "verify_requests_total",
    "Total signature verification requests processed",
    ["outcome"],
)

verify_request_duration_seconds = Histogram(
    "verify_request_duration_seconds",
    "Wall time to process a signature verification request",
    ["outcome"],
)


def _observe(outcome: str, start_time: float) -> None:
    verify_requests_total.labels(outcome=outcome).inc()
    verify_request_duration_seconds.labels(outcome=outcome).observe(
        time.perf_counter() - start_time
    )


def _is_json_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


def _declared_length(request: Request) -> Optional[int]:
    content_length = request.headers.get("content-length")
    if content_length is None or not content_length.isdigit():
        return None
    return int(content_length)


async def _read_body(request: Request, limit: int) -> Optional[bytes]:
    """Read the request body, or return None as soon as it exceeds ``limit`` bytes."""
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            return None
    return bytes(body)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


@router.post(
    "/verify",
    response_model=VerifyResponseDTO,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": VerifyResponseDTO},
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: {"model": VerifyResponseDTO},
    },
)
async def verify_signature(
    request: Request,
    settings: Settings = Depends(get_settings),
    verifier: SignatureVerifier = Depends(get_signature_verifier),
    clock: Clock = Depends(get_clock),
    correlation_id: str = Depends(get_correlation_id),
) -> JSONResponse:
    """Recover the signer of an EIP-712 payment authorization."""
    start_time = time.perf_counter()
    limit = settings.max_request_body_bytes

    declared = _declared_length(request)
    if declared is not None and declared > limit:
        logger.warning("[CID: %s] Rejected: Payload too large", correlation_id)
        _observe("too_large", start_time)
        return rejection_response(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            f"Request body too large (max {limit} bytes)",
        )

    if not _is_json_content_type(request.headers.get("content-type")):
        logger.warning("[CID: %s] Rejected: Missing JSON content type", correlation_id)
        _observe("client_error", start_time)
        return rejection_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request: Expected request with `Content-Type: application/json`",
        )

    body = await _read_body(request, limit)
    if body is None:
        logger.warning("[CID: %s] Rejected: Payload too large", correlation_id)
        _observe("too_large", start_time)
        return rejection_response(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            f"Request body too large (max {limit} bytes)",
        )

    try:
        payload = VerifyRequestDTO.model_validate_json(body)
    except ValidationError as e:
        logger.warning("[CID: %s] Rejected: Invalid JSON or formatting", correlation_id)
        _observe("client_error", start_time)
        return rejection_response(
            status.HTTP_400_BAD_REQUEST,
            f"Invalid request: {_describe_validation_error(e)}",
        )

    logger.info("[CID: %s] Verify nonce=%s", correlation_id, payload.context.nonce)

    now = clock()
    outcome = await run_in_threadpool(
        verifier.verify, payload.context.to_domain(), payload.signature, now
    )
    response = outcome_response(outcome)

    if outcome.error is None:
        logger.info(
            "[CID: %s] Verified signer=%s", correlation_id, outcome.recovered_address
        )
        _observe("valid", start_time)
    else:
        logger.info(
            "[CID: %s] Rejected: %s", correlation_id, render_error(outcome.error)
        )
        _observe(
            "rejected"
            if response.status_code == status.HTTP_200_OK
            else "client_error",
            start_time,
        )
    return response
