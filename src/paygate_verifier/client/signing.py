"""Client-side helpers for producing signed payment authorizations."""

from __future__ import annotations

import time
import uuid
from typing import Optional

from eth_account import Account
from eth_utils import to_hex

from ..application.dtos import PaymentContextDTO, VerifyRequestDTO
from ..crypto.typed_data import encode_payment
from ..domain.entities import PaymentContext


def new_payment_context(
    recipient: str,
    amount: str,
    chain_id: int,
    token: str = "USDC",
    nonce: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> PaymentContext:
    """Build a fresh payment context with a random nonce and the current time.

    Args:
        recipient: Address that receives the payment
        amount: Decimal amount as text, signed exactly as given
        chain_id: Target network id
        token: Token symbol
        nonce: Uniqueness token; a uuid4 is generated when omitted
        timestamp: Signing time in Unix seconds; defaults to now

    Returns:
        The payment context to be signed.
    """
    return PaymentContext(
        recipient=recipient,
        token=token,
        amount=amount,
        nonce=nonce or str(uuid.uuid4()),
        chain_id=chain_id,
        timestamp=int(time.time()) if timestamp is None else timestamp,
    )


def signer_address(private_key: str) -> str:
    """Lower-case address of a private key, as the verifier reports it."""
    return Account.from_key(private_key).address.lower()


def sign_payment(private_key: str, context: PaymentContext) -> str:
    """Sign a payment context with an Ethereum private key (0x-prefixed hex)."""
    signed = Account.sign_message(encode_payment(context), private_key)
    return to_hex(signed.signature)


def build_verify_request(private_key: str, context: PaymentContext) -> VerifyRequestDTO:
    """Sign ``context`` and wrap it in the verifier's request body."""
    return VerifyRequestDTO(
        context=PaymentContextDTO.from_domain(context),
        signature=sign_payment(private_key, context),
    )
