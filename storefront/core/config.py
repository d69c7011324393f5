#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
The content engine itself never reads these; the render pipeline and the
HTTP layer pass the relevant values in explicitly.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "PyStorefront"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "testing", "production"] = "development"
    log_level: str = "INFO"

    # ── Auto-linking ───────────────────────────────────────────────────────

    auto_link_enabled: bool = True
    max_links_per_term: int = 1

    # ── Shortcodes / rendering ─────────────────────────────────────────────

    max_products_limit: int = 24        # ceiling for [products:slug,N] grids
    preserve_whitespace_gaps: bool = False

    # ── Request limits ─────────────────────────────────────────────────────

    max_content_chars: int = 500_000

    # ── CORS ───────────────────────────────────────────────────────────────

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()

# -----------------------------------------------------------------------------
