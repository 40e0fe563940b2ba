"""EIP-712 payment signature verification service."""

from __future__ import annotations

from ..crypto.typed_data import encode_payment, parse_signature, recover_address
from ..domain.entities import PaymentContext, VerificationOutcome
from ..domain.errors import VerificationError
from .timestamp_validator import TimestampPolicy


class SignatureVerifier:
    """Recover the signer of a payment context.

    Holds no state besides its timestamp policy, so a single instance can be
    shared across concurrent requests.
    """

    def __init__(self, policy: TimestampPolicy) -> None:
        self._policy = policy

    def recover_signer(
        self, context: PaymentContext, signature_hex: str, now: int
    ) -> str:
        """Return the address that signed ``context``.

        Each step is a hard gate: the timestamp is checked first, then the
        typed data is built, then the signature is parsed and recovered.

        Raises:
            TimestampError: If the timestamp is missing, expired or in the future.
            TypedDataError: If the context cannot be encoded.
            MalformedSignatureError: If the signature is not 65 bytes of hex.
            SignatureRecoveryError: If no public key can be recovered.
        """
        self._policy.validate(context.timestamp, now)
        signable = encode_payment(context)
        signature = parse_signature(signature_hex)
        return recover_address(signable, signature)

    def verify(
        self, context: PaymentContext, signature_hex: str, now: int
    ) -> VerificationOutcome:
        """Verify a payment signature and report the outcome instead of raising."""
        try:
            address = self.recover_signer(context, signature_hex, now)
        except VerificationError as e:
            return VerificationOutcome.invalid(e)
        return VerificationOutcome.valid(address)
