"""FastAPI application configuration (Verifier API)."""

from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI
from prometheus_client import CollectorRegistry, make_asgi_app, multiprocess

from ..env import Settings, get_settings
from ..middleware.correlation import CorrelationIdMiddleware
from .routers import health, verify


def create_metrics_app():
    """Prometheus exposition app, aggregating worker processes when configured."""
    if os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return make_asgi_app(registry=registry)
    return make_asgi_app()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Stateless EIP-712 payment signature verifier",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(health.router)
    app.include_router(verify.router)
    app.mount("/metrics", create_metrics_app())

    return app


app = create_app()
