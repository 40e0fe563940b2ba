from __future__ import annotations

import os
from typing import Optional, Type
from types import TracebackType

import httpx
from fastapi import status

from ..application.dtos import HealthResponseDTO, VerifyRequestDTO, VerifyResponseDTO
from ..middleware.correlation import CORRELATION_ID_HEADER

DEFAULT_VERIFIER_URL = "http://127.0.0.1:3002"

# The verifier answers these with a VerifyResponse body instead of a bare error.
_VERIFY_RESPONSE_STATUSES = {
    status.HTTP_200_OK,
    status.HTTP_400_BAD_REQUEST,
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
}


class VerifierClientAsync:
    """Asynchronous client a payment gateway uses to call the verifier.

    A decoded ``VerifyResponseDTO`` only says who signed; the caller still has
    to compare ``recovered_address`` with the signer it expects.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport
        )

    @classmethod
    def from_env(cls, timeout: float = 5.0) -> "VerifierClientAsync":
        """Build a client for ``VERIFIER_URL`` (defaults to the local verifier)."""
        return cls(os.environ.get("VERIFIER_URL", DEFAULT_VERIFIER_URL), timeout)

    @staticmethod
    def _headers(correlation_id: Optional[str]) -> dict[str, str]:
        return {CORRELATION_ID_HEADER: correlation_id} if correlation_id else {}

    async def health(self, correlation_id: Optional[str] = None) -> HealthResponseDTO:
        resp = await self._client.get("/health", headers=self._headers(correlation_id))
        resp.raise_for_status()
        return HealthResponseDTO.model_validate(resp.json())

    async def verify(
        self,
        request: VerifyRequestDTO,
        correlation_id: Optional[str] = None,
    ) -> VerifyResponseDTO:
        """Ask the verifier to recover the signer of a payment.

        Rejections (including malformed signatures and oversized bodies) come
        back as a ``VerifyResponseDTO`` with ``is_valid=False``. Any other
        status raises ``httpx.HTTPStatusError``.
        """
        resp = await self._client.post(
            "/verify",
            json=request.model_dump(by_alias=True),
            headers=self._headers(correlation_id),
        )
        if resp.status_code not in _VERIFY_RESPONSE_STATUSES:
            resp.raise_for_status()
        return VerifyResponseDTO.model_validate(resp.json())

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "VerifierClientAsync":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
