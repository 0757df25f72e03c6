"""Aggregate app for the pre-mortem engines."""
from __future__ import annotations

import logging

from fastapi import FastAPI

from premortem import __version__
from premortem.enforcement.routes import router as enforcement_router
from premortem.generation.routes import router as generation_router
from premortem.reports.routes import router as reports_router


def create_app() -> FastAPI:
    logging.basicConfig(level=logging.INFO)
    app = FastAPI(title="Pre-Mortem Forensic Engine", version=__version__)
    app.include_router(generation_router)
    app.include_router(enforcement_router)
    app.include_router(reports_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
