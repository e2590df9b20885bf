# src/tripselect/api/app.py
"""
FastAPI application wiring.

Creates the `FastAPI` instance, applies logging config and CORS, and mounts the router.
Endpoints live in `tripselect.api.routes`; selection logic in `tripselect.recommender`.

Run with `tripselect serve` or `uvicorn tripselect.api.app:app`.
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from tripselect.core.logging import configure_logging

from .routes import router

_LOCALHOST_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"


def _cors_options() -> dict | None:
    """CORS settings from env (`TRIPSELECT_CORS_ORIGINS`, `TRIPSELECT_CORS_ALLOW_LOCAL`), or None."""
    origins = [o.strip() for o in os.getenv("TRIPSELECT_CORS_ORIGINS", "").split(",") if o.strip()]
    allow_local = os.getenv("TRIPSELECT_CORS_ALLOW_LOCAL", "1").strip().lower() in {"1", "true", "yes", "y"}
    if origins:
        return {"allow_origins": origins}
    if allow_local:
        return {"allow_origins": [], "allow_origin_regex": _LOCALHOST_ORIGIN_REGEX}
    return None


def create_app() -> FastAPI:
    configure_logging()
    application = FastAPI(title="TripSelect API", version="0.1.0")

    cors = _cors_options()
    if cors is not None:
        application.add_middleware(
            CORSMiddleware,
            allow_credentials=False,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
            **cors,
        )

    application.include_router(router)

    @application.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return application


app = create_app()
