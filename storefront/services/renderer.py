#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
RenderPipeline
==============
Turns stored article / product HTML into storefront markup:

    raw HTML
      → heading ids            (services.headings)
      → auto-linking           (services.autolink, optional)
      → content blocks         (services.shortcodes)
      → per-block templates    (templates/blocks/*.html)
      + table of contents      (services.headings.render_toc)

The pipeline does no data access.  Everything a shortcode can refer to is
fetched up front by the caller (see ``extract_shortcode_references``) and
handed over in a ``RenderContext``.  Unresolvable shortcodes render as a
visible placeholder rather than failing the page.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from storefront.core.config import Settings, get_settings
from storefront.schemas import ProductCard
from storefront.services.autolink import AutoLinker, LinkableItem
from storefront.services.headings import Heading, add_heading_ids, extract_headings, render_toc
from storefront.services.shortcodes import (
    ComparisonShortcode,
    ContentBlock,
    HtmlBlock,
    ProductShortcode,
    ProductsShortcode,
    parse_content,
)
from storefront.services.shortcodes.models import PRODUCT_VARIANTS
from storefront.templating import templates

logger = logging.getLogger(__name__)

MIN_COMPARISON_PRODUCTS = 2


# -----------------------------------------------------------------------------

@dataclass
class RenderContext:
    """Pre-fetched data for one render call."""

    site_slug: str
    products: dict[str, ProductCard] = field(default_factory=dict)
    category_products: dict[str, list[ProductCard]] = field(default_factory=dict)
    link_items: list[LinkableItem] = field(default_factory=list)
    enable_auto_link: bool = True
    max_links_per_term: Optional[int] = None
    class_name: str = ""
    toc_title: str = ""


@dataclass
class RenderResult:
    html: str
    headings: list[Heading]
    blocks: list[ContentBlock]
    toc: str = ""


# -----------------------------------------------------------------------------

class RenderPipeline:
    """
    Render content for a storefront page.

    Usage::

        pipeline = RenderPipeline()
        result = pipeline.render(article.content, RenderContext(site_slug="mice"))
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    # ----------------------------------------------------------------- public

    def prepare(self, content: Optional[str], ctx: RenderContext) -> str:
        """Apply heading ids and auto-linking; return the processed HTML."""
        processed = add_heading_ids(content)

        if ctx.enable_auto_link and self.settings.auto_link_enabled and ctx.link_items:
            cap = ctx.max_links_per_term or self.settings.max_links_per_term
            processed = AutoLinker(ctx.site_slug, ctx.link_items, cap).process(processed)

        return processed

    def render(self, content: Optional[str], ctx: RenderContext) -> RenderResult:
        if not content:
            return RenderResult(html="", headings=[], blocks=[])

        processed = self.prepare(content, ctx)
        blocks = parse_content(
            processed, keep_whitespace=self.settings.preserve_whitespace_gaps,
        )
        rendered = [self.render_block(block, ctx) for block in blocks]

        html = templates.get_template("content.html").render(
            blocks=rendered, class_name=ctx.class_name,
        )
        headings = extract_headings(processed)
        return RenderResult(
            html=html, headings=headings, blocks=blocks,
            toc=render_toc(headings, title=ctx.toc_title),
        )

    def render_block(self, block: ContentBlock, ctx: RenderContext) -> str:
        if isinstance(block, HtmlBlock):
            return _render("blocks/html.html", content=block.content)

        sc = block.shortcode
        if isinstance(sc, ProductShortcode):
            return self._render_product(sc, ctx)
        if isinstance(sc, ProductsShortcode):
            return self._render_products(sc, ctx)
        if isinstance(sc, ComparisonShortcode):
            return self._render_comparison(sc, ctx)
        raise TypeError(f"Unknown content block: {block!r}")

    # ----------------------------------------------------------------- private

    def _render_product(self, sc: ProductShortcode, ctx: RenderContext) -> str:
        product = ctx.products.get(sc.slug)
        if product is None:
            logger.info("Product shortcode unresolved: %s (site %s)", sc.slug, ctx.site_slug)
            return _placeholder("product", f"Product not found: {sc.slug}")

        variant = sc.variant if sc.variant in PRODUCT_VARIANTS else "default"
        return _render(
            "blocks/product_card.html",
            product=product, variant=variant, site_slug=ctx.site_slug,
        )

    def _render_products(self, sc: ProductsShortcode, ctx: RenderContext) -> str:
        products = ctx.category_products.get(sc.category_slug) or []
        if not products:
            logger.info("Products shortcode empty: %s (site %s)", sc.category_slug, ctx.site_slug)
            return _placeholder("products", f"No products found for category: {sc.category_slug}")

        limit = min(sc.limit, self.settings.max_products_limit)
        return _render(
            "blocks/product_grid.html",
            products=products[:limit], category_slug=sc.category_slug, site_slug=ctx.site_slug,
        )

    def _render_comparison(self, sc: ComparisonShortcode, ctx: RenderContext) -> str:
        products = [ctx.products[slug] for slug in sc.slugs if slug in ctx.products]
        if len(products) < MIN_COMPARISON_PRODUCTS:
            logger.info("Comparison shortcode resolved %d of %d products", len(products), len(sc.slugs))
            return _placeholder(
                "comparison",
                "Not enough products found for comparison. "
                f"Found: {len(products)}, Need: {MIN_COMPARISON_PRODUCTS}",
            )

        return _render("blocks/comparison.html", products=products, site_slug=ctx.site_slug)


# -----------------------------------------------------------------------------

def _render(template_name: str, **context) -> str:
    return templates.get_template(template_name).render(**context)


def _placeholder(kind: str, message: str) -> str:
    return _render("blocks/placeholder.html", kind=kind, message=message)
