#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
PyStorefront content service
============================
Entry point.  Start with:
    uvicorn storefront.main:app --reload
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import get_settings
from storefront.routes import content

API = "/api/v1"


# -----------------------------------------------------------------------------

def create_app() -> FastAPI:
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        description="Shortcode, auto-linking and rendering service for storefront content",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────
    app.include_router(content.router, prefix=API)

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/api/docs",
        }

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
