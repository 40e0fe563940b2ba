from __future__ import annotations

from typing import Any

from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from eth_utils import decode_hex

from ..domain.entities import PaymentContext, SigningDomain
from ..domain.errors import (
    MalformedSignatureError,
    SignatureRecoveryError,
    TypedDataError,
)

SIGNATURE_LENGTH = 65

PRIMARY_TYPE = "Payment"

PAYMENT_TYPES: dict[str, list[dict[str, str]]] = {
    PRIMARY_TYPE: [
        {"name": "recipient", "type": "address"},
        {"name": "token", "type": "string"},
        {"name": "amount", "type": "string"},
        {"name": "nonce", "type": "string"},
        {"name": "timestamp", "type": "uint256"},
    ]
}


def domain_data(domain: SigningDomain) -> dict[str, Any]:
    """Return the EIP-712 domain as the JSON object wallets expect."""
    return {
        "name": domain.name,
        "version": domain.version,
        "chainId": domain.chain_id,
        "verifyingContract": domain.verifying_contract,
    }


def payment_message(context: PaymentContext) -> dict[str, Any]:
    """Return the ``Payment`` struct values, in field order."""
    return {
        "recipient": context.recipient,
        "token": context.token,
        "amount": context.amount,
        "nonce": context.nonce,
        "timestamp": context.timestamp,
    }


def build_typed_data(context: PaymentContext) -> dict[str, Any]:
    """Build the full ``eth_signTypedData_v4`` document for a payment context."""
    return {
        "domain": domain_data(SigningDomain.for_chain(context.chain_id)),
        "types": PAYMENT_TYPES,
        "primaryType": PRIMARY_TYPE,
        "message": payment_message(context),
    }


def encode_payment(context: PaymentContext) -> SignableMessage:
    """Encode a payment context into the EIP-712 signable message.

    Raises:
        TypedDataError: If a field cannot be encoded as its declared type
            (for example a recipient that is not an address).
    """
    try:
        return encode_typed_data(full_message=build_typed_data(context))
    except Exception as e:
        raise TypedDataError(str(e)) from e


def parse_signature(signature_hex: str) -> bytes:
    """Decode an optionally 0x-prefixed hex signature into its 65 raw bytes (r, s, v)."""
    try:
        signature = decode_hex(signature_hex)
    except (ValueError, TypeError) as e:
        raise MalformedSignatureError(f"invalid hex encoding: {e}") from e
    if len(signature) != SIGNATURE_LENGTH:
        raise MalformedSignatureError(
            f"invalid signature length, got {len(signature)} bytes, "
            f"expected {SIGNATURE_LENGTH}"
        )
    return signature


def recover_address(signable: SignableMessage, signature: bytes) -> str:
    """Recover the signer address as lower-case 0x hex."""
    try:
        address = Account.recover_message(signable, signature=signature)
    except Exception as e:
        raise SignatureRecoveryError(str(e)) from e
    return address.lower()

