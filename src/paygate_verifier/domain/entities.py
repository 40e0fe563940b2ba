"""Verifier domain entities: PaymentContext, SigningDomain and VerificationOutcome."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .errors import VerificationError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class PaymentContext(BaseModel):
    """The payment intent a client signed.

    ``recipient``, ``token``, ``amount`` and ``nonce`` are carried verbatim into
    the signed message. ``amount`` stays text so the signature covers exactly
    the string the signer saw.
    """

    model_config = ConfigDict(frozen=True)

    recipient: str
    token: str
    amount: str
    nonce: str
    chain_id: int
    timestamp: Optional[int] = None


class SigningDomain(BaseModel):
    """EIP-712 domain. Only ``chain_id`` varies between requests."""

    model_config = ConfigDict(frozen=True)

    name: str = "MicroAI Paygate"
    version: str = "1"
    chain_id: int
    # Off-chain scheme: not bound to a deployed contract.
    verifying_contract: str = ZERO_ADDRESS

    @classmethod
    def for_chain(cls, chain_id: int) -> "SigningDomain":
        return cls(chain_id=chain_id)


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of a verification: a recovered address or the reason it failed."""

    recovered_address: Optional[str] = None
    error: Optional[VerificationError] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @classmethod
    def valid(cls, recovered_address: str) -> "VerificationOutcome":
        return cls(recovered_address=recovered_address)

    @classmethod
    def invalid(cls, error: VerificationError) -> "VerificationOutcome":
        return cls(error=error)
