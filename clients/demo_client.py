from __future__ import annotations

import asyncio
import json
import os
import uuid

from eth_account import Account

from paygate_verifier.client.signing import (
    build_verify_request,
    new_payment_context,
    signer_address,
)
from paygate_verifier.infrastructure.verifier_client import VerifierClientAsync


def print_response(label: str, data: dict) -> None:
    print(f"{label}:\n{json.dumps(data, indent=2)}")


async def main() -> None:
    # Throwaway key unless one is supplied
    private_key = os.environ.get("DEMO_PRIVATE_KEY") or Account.create().key.hex()
    expected_signer = signer_address(private_key)
    chain_id = int(os.environ.get("CHAIN_ID", "8453"))
    correlation_id = str(uuid.uuid4())

    context = new_payment_context(
        recipient=os.environ.get(
            "RECIPIENT_ADDRESS", "0x1234567890123456789012345678901234567890"
        ),
        amount=os.environ.get("PAYMENT_AMOUNT", "0.001"),
        chain_id=chain_id,
    )
    request = build_verify_request(private_key, context)

    async with VerifierClientAsync.from_env() as client:
        health = await client.health(correlation_id)
        print_response("Health", health.model_dump())

        result = await client.verify(request, correlation_id)
        print_response("Verify", result.model_dump(by_alias=True))

        tampered = request.model_copy(
            update={
                "context": request.context.model_copy(update={"amount": "1000"})
            }
        )
        tampered_result = await client.verify(tampered, correlation_id)
        print_response("Verify (tampered amount)", tampered_result.model_dump(by_alias=True))

    if result.is_valid and result.recovered_address == expected_signer:
        print(f"Signature authorized for {expected_signer}")
    else:
        print("Signature NOT authorized")


if __name__ == "__main__":
    asyncio.run(main())
