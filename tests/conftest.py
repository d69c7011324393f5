#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Test fixtures
=============
The content engine is pure, so most tests call it directly.  The API tests
get an httpx AsyncClient bound to a fresh app over ASGITransport.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ── Env vars must be set before importing app modules ────────────────────────
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_LEVEL",   "DEBUG")

from storefront.core.config import Settings, get_settings
from storefront.main import create_app
from storefront.schemas import ProductCard
from storefront.services.autolink import LinkableItem


# ── App + client ──────────────────────────────────────────────────────────────

@pytest.fixture
def app():
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def settings() -> Settings:
    return get_settings()


# ── Catalogue helpers ─────────────────────────────────────────────────────────

def make_product(slug: str, **kwargs) -> ProductCard:
    defaults = dict(
        slug=slug,
        title=slug.replace("-", " ").title(),
        price_from=49.99,
        price_currency="USD",
        rating=4.5,
        product_type="mouse",
    )
    defaults.update(kwargs)
    return ProductCard(**defaults)


def product_item(name: str, slug: str | None = None) -> LinkableItem:
    return LinkableItem(slug=slug or name.lower().replace(" ", "-"), name=name, type="product")


def category_item(name: str, slug: str | None = None) -> LinkableItem:
    return LinkableItem(slug=slug or name.lower().replace(" ", "-"), name=name, type="category")
