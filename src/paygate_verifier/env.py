from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_MAX_REQUEST_BODY_BYTES = 1024 * 1024


def default_workers() -> int:
    return os.cpu_count() or 1


class Settings(BaseModel):
    """Typed application settings built from environment variables."""

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 3002
    api_debug: bool = False
    api_workers: int = Field(default_factory=default_workers)

    # Application settings
    app_name: str = "verifier"
    app_version: str = "0.1.0"

    # Verification settings
    max_request_body_bytes: int = DEFAULT_MAX_REQUEST_BODY_BYTES
    signature_expiry_seconds: int = 300
    signature_clock_skew_seconds: int = 60

    @field_validator("max_request_body_bytes", "api_workers")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("signature_expiry_seconds", "signature_clock_skew_seconds")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must not be negative")
        return v


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        api_host=os.environ.get("VERIFIER_API_HOST", "0.0.0.0"),
        api_port=int(os.environ.get("VERIFIER_API_PORT", "3002")),
        api_debug=os.environ.get("VERIFIER_API_DEBUG", "false").lower() == "true",
        api_workers=int(
            os.environ.get("VERIFIER_API_WORKERS", str(default_workers()))
        ),
        app_name=os.environ.get("VERIFIER_APP_NAME", "verifier"),
        app_version=os.environ.get("VERIFIER_APP_VERSION", "0.1.0"),
        max_request_body_bytes=int(
            os.environ.get(
                "MAX_REQUEST_BODY_BYTES", str(DEFAULT_MAX_REQUEST_BODY_BYTES)
            )
        ),
        signature_expiry_seconds=int(
            os.environ.get("SIGNATURE_EXPIRY_SECONDS", "300")
        ),
        signature_clock_skew_seconds=int(
            os.environ.get("SIGNATURE_CLOCK_SKEW_SECONDS", "60")
        ),
    )
