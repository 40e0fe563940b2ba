"""Shared pytest fixtures for verifier tests."""

from __future__ import annotations

from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from paygate_verifier.api.app import create_app
from paygate_verifier.api.dependencies import get_clock
from paygate_verifier.application.dtos import VerifyRequestDTO
from paygate_verifier.application.signature_verifier import SignatureVerifier
from paygate_verifier.application.timestamp_validator import TimestampPolicy
from paygate_verifier.client.signing import build_verify_request, signer_address
from paygate_verifier.domain.entities import PaymentContext
from paygate_verifier.env import Settings

from tests.fixtures.keys import FIXED_NOW, TEST_PRIVATE_KEY, TEST_RECIPIENT


@pytest.fixture
def now() -> int:
    """Fixed 'current time' so tests never depend on the wall clock."""
    return FIXED_NOW


@pytest.fixture
def private_key() -> str:
    return TEST_PRIVATE_KEY


@pytest.fixture
def signer(private_key: str) -> str:
    """Lower-case address derived from the test private key."""
    return signer_address(private_key)


@pytest.fixture
def payment_context(now: int) -> PaymentContext:
    return PaymentContext(
        recipient=TEST_RECIPIENT,
        token="USDC",
        amount="100",
        nonce="nonce-1",
        chain_id=1,
        timestamp=now,
    )


@pytest.fixture
def verifier() -> SignatureVerifier:
    return SignatureVerifier(TimestampPolicy(max_age=300, max_skew=60))


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def app(settings: Settings, now: int) -> Generator[FastAPI, None, None]:
    """Verifier app whose clock is pinned to ``now``."""
    application = create_app(settings)
    application.dependency_overrides[get_clock] = lambda: (lambda: now)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def signed_request(
    private_key: str, payment_context: PaymentContext
) -> Callable[..., VerifyRequestDTO]:
    """Factory for signed verify requests; keyword overrides change the signed context."""

    def _make(**overrides) -> VerifyRequestDTO:
        context = payment_context.model_copy(update=overrides)
        return build_verify_request(private_key, context)

    return _make
