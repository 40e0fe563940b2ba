from __future__ import annotations

from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

CORRELATION_ID_HEADER = "X-Correlation-ID"
UNKNOWN_CORRELATION_ID = "unknown"


def _is_visible_header_value(value: str) -> bool:
    return all(ch == "\t" or " " <= ch <= "~" for ch in value)


def resolve_correlation_id(header_value: Optional[str]) -> str:
    """Return the inbound correlation id, or ``unknown`` if absent or not plain ASCII."""
    if header_value is None or not _is_visible_header_value(header_value):
        return UNKNOWN_CORRELATION_ID
    return header_value


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Echo ``X-Correlation-ID`` on every response.

    The id is attached to ``request.state.correlation_id`` for log lines. It is
    never used to decide anything about the request.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        correlation_id = resolve_correlation_id(
            request.headers.get(CORRELATION_ID_HEADER)
        )
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
