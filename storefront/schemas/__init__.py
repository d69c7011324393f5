"""
Pydantic v2 schemas for request validation and response serialisation.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Shared
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

SLUG_PATTERN = r"^[a-z0-9-]+$"


class ContentRequest(BaseModel):
    content: str = ""


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Catalogue records (pre-fetched by the caller)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ProductCard(BaseModel):
    slug: str
    title: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    price_from: Optional[float] = None
    price_currency: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    product_type: str = ""
    is_featured: bool = False
    primary_affiliate_url: Optional[str] = None

    @property
    def price_label(self) -> str:
        if self.price_from is None:
            return ""
        currency = self.price_currency or "USD"
        return f"From {self.price_from:,.2f} {currency}"


# -----------------------------------------------------------------------------

class ProductRef(BaseModel):
    slug: str
    title: str


# -----------------------------------------------------------------------------

class CategoryRef(BaseModel):
    slug: str
    name: str


# -----------------------------------------------------------------------------

class LinkableItemIn(BaseModel):
    slug: str
    name: str
    type: Literal["product", "category"]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Parsing
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ParseRequest(ContentRequest):
    keep_whitespace: bool = False


# -----------------------------------------------------------------------------

class ShortcodeValueRequest(BaseModel):
    value: str = Field(..., min_length=1, max_length=1024)


# -----------------------------------------------------------------------------

class ShortcodeOut(BaseModel):
    type: Literal["product", "products", "comparison"]
    position: int
    text: str
    label: str
    slug: Optional[str] = None
    variant: Optional[str] = None
    category_slug: Optional[str] = None
    limit: Optional[int] = None
    slugs: Optional[list[str]] = None


# -----------------------------------------------------------------------------

class BlockOut(BaseModel):
    type: Literal["html", "product", "products", "comparison"]
    content: Optional[str] = None
    shortcode: Optional[ShortcodeOut] = None


# -----------------------------------------------------------------------------

class ParseResponse(BaseModel):
    blocks: list[BlockOut]


# -----------------------------------------------------------------------------

class ReferencesResponse(BaseModel):
    product_slugs: list[str]
    category_slugs: list[str]


# -----------------------------------------------------------------------------

class ValidateRequest(ContentRequest):
    product_slugs: list[str] = []
    category_slugs: list[str] = []


# -----------------------------------------------------------------------------

class ValidateResponse(BaseModel):
    ok: bool
    missing_products: list[str]
    missing_categories: list[str]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Auto-linking
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AutoLinkRequest(ContentRequest):
    site_slug: str = Field(..., min_length=1, max_length=128, pattern=SLUG_PATTERN)
    products: list[ProductRef] = []
    categories: list[CategoryRef] = []
    items: list[LinkableItemIn] = []
    max_links_per_term: Optional[int] = Field(None, ge=1, le=100)


# -----------------------------------------------------------------------------

class AutoLinkResponse(BaseModel):
    content: str
    link_count: int


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Headings / rendering
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HeadingOut(BaseModel):
    id: str
    text: str
    level: int


# -----------------------------------------------------------------------------

class HeadingsResponse(BaseModel):
    content: str
    headings: list[HeadingOut]


# -----------------------------------------------------------------------------

class RenderRequest(ContentRequest):
    site_slug: str = Field(..., min_length=1, max_length=128, pattern=SLUG_PATTERN)
    products: list[ProductCard] = []
    category_products: dict[str, list[ProductCard]] = {}
    all_products: list[ProductRef] = []
    all_categories: list[CategoryRef] = []
    enable_auto_link: Optional[bool] = None
    class_name: str = Field(default="", max_length=256)
    toc_title: str = Field(default="", max_length=256)

    @field_validator("category_products")
    @classmethod
    def category_slugs_valid(cls, v: dict[str, list[ProductCard]]) -> dict[str, list[ProductCard]]:
        for slug in v:
            if not slug or slug.strip() != slug:
                raise ValueError(f"Invalid category slug '{slug}'")
        return v


# -----------------------------------------------------------------------------

class RenderResponse(BaseModel):
    html: str
    headings: list[HeadingOut]
    toc: str = ""
    block_count: int
