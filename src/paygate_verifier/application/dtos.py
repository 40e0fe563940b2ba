"""Data Transfer Objects for the verifier HTTP API."""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from ..domain.entities import PaymentContext
from .timestamp_validator import U64_MAX

U64 = Annotated[int, Field(ge=0, le=U64_MAX, strict=True)]


class PaymentContextDTO(BaseModel):
    """Payment context as sent by the gateway."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "recipient": "0x1234567890123456789012345678901234567890",
                "token": "USDC",
                "amount": "0.001",
                "nonce": "3f0c1d9e-5b1a-4c39-9a43-1c6f0d2f7e11",
                "chainId": 8453,
                "timestamp": 1760000000,
            }
        },
    )

    recipient: StrictStr
    token: StrictStr
    amount: StrictStr
    nonce: StrictStr
    chain_id: U64 = Field(..., alias="chainId")
    timestamp: Optional[U64] = None

    def to_domain(self) -> PaymentContext:
        return PaymentContext(
            recipient=self.recipient,
            token=self.token,
            amount=self.amount,
            nonce=self.nonce,
            chain_id=self.chain_id,
            timestamp=self.timestamp,
        )

    @classmethod
    def from_domain(cls, context: PaymentContext) -> "PaymentContextDTO":
        return cls(
            recipient=context.recipient,
            token=context.token,
            amount=context.amount,
            nonce=context.nonce,
            chain_id=context.chain_id,
            timestamp=context.timestamp,
        )


class VerifyRequestDTO(BaseModel):
    """DTO for a signature verification request."""

    context: PaymentContextDTO
    signature: StrictStr


class VerifyResponseDTO(BaseModel):
    """DTO for returning a verification result."""

    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(..., alias="isValid")
    recovered_address: Optional[str] = Field(None, alias="recoveredAddress")
    error: Optional[str] = None


class HealthResponseDTO(BaseModel):
    """DTO for the health check endpoint."""

    status: str
    service: str
    version: str
