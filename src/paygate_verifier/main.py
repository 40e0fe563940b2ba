from __future__ import annotations

import copy
import os

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from .env import get_settings


def _setup_prometheus_multiproc_dir() -> None:
    """Prepare the Prometheus multiprocess directory before Uvicorn forks workers.

    This ensures each process writes to a clean directory so metrics can be
    correctly aggregated by the multiprocess collector.
    """
    prom_dir = os.environ.get("PROMETHEUS_MULTIPROC_DIR")
    if not prom_dir:
        return

    os.makedirs(prom_dir, exist_ok=True)
    for filename in os.listdir(prom_dir):
        file_path = os.path.join(prom_dir, filename)
        if os.path.isfile(file_path):
            os.remove(file_path)


def _log_config(log_level: str) -> dict:
    """Uvicorn logging config with the service loggers routed to its default handler."""
    config = copy.deepcopy(LOGGING_CONFIG)
    config["loggers"]["paygate_verifier"] = {
        "handlers": ["default"],
        "level": log_level.upper(),
        "propagate": False,
    }
    return config


def main() -> None:
    """Main entry point for the verifier service."""

    settings = get_settings()

    print(f"Starting {settings.app_name} v{settings.app_version}")
    print(
        f"Signature window: {settings.signature_expiry_seconds}s "
        f"(clock skew {settings.signature_clock_skew_seconds}s), "
        f"max body {settings.max_request_body_bytes} bytes"
    )
    print(f"Verifier listening on http://{settings.api_host}:{settings.api_port}")

    # Verification is CPU-bound; spread it over one worker per core unless
    # reload is on (Uvicorn doesn't support multi-worker with reload).
    reload = settings.api_debug
    workers = 1 if reload else settings.api_workers
    log_level = "debug" if settings.api_debug else "info"

    _setup_prometheus_multiproc_dir()

    uvicorn.run(
        "paygate_verifier.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
        workers=workers,
        log_level=log_level,
        log_config=_log_config(log_level),
    )


if __name__ == "__main__":
    main()
