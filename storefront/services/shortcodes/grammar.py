"""
Shortcode grammar
=================
The one place that knows what a shortcode looks like.

    [product:slug]                 [product:slug,variant]
    [products:category-slug]       [products:category-slug,limit]
    [comparison:slug-a,slug-b]     [comparison:slug-a, slug-b, slug-c]

Each entry of ``SHORTCODE_GRAMMAR`` pairs the forward pattern with the
builder that turns a match into a descriptor and the formatter that turns
a descriptor back into canonical text.  The extractor, the block parser and
the editor helpers all go through this table, so the bracket syntax is
never spelled out twice.

Keywords are case-insensitive, slugs are not: ``[PRODUCT:mouse]`` matches,
``[product:Mouse]`` does not.  Table order doubles as the tie-break when
two patterns start at the same offset.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .models import (
    DEFAULT_PRODUCTS_LIMIT,
    DEFAULT_VARIANT,
    ComparisonShortcode,
    ProductShortcode,
    ProductsShortcode,
    Shortcode,
    ShortcodeKind,
)

_SLUG = r"[a-z0-9-]+"

_PRODUCT_RE = re.compile(
    r"\[(?i:product):(" + _SLUG + r")(?:,(\w+))?\]"
)
_PRODUCTS_RE = re.compile(
    r"\[(?i:products):(" + _SLUG + r")(?:,([0-9]+))?\]"
)
_COMPARISON_RE = re.compile(
    r"\[(?i:comparison):\s*(" + _SLUG + r"(?:\s*,\s*" + _SLUG + r")*)\s*\]"
)


# -----------------------------------------------------------------------------

def _build_product(m: re.Match[str]) -> ProductShortcode:
    variant = (m.group(2) or DEFAULT_VARIANT).lower()
    return ProductShortcode(
        slug=m.group(1), variant=variant, position=m.start(), source=m.group(0),
    )


def _build_products(m: re.Match[str]) -> ProductsShortcode:
    limit = int(m.group(2)) if m.group(2) else DEFAULT_PRODUCTS_LIMIT
    if limit < 1:
        limit = DEFAULT_PRODUCTS_LIMIT
    return ProductsShortcode(
        category_slug=m.group(1), limit=limit, position=m.start(), source=m.group(0),
    )


def _build_comparison(m: re.Match[str]) -> ComparisonShortcode:
    slugs = tuple(s.strip() for s in m.group(1).split(","))
    return ComparisonShortcode(slugs=slugs, position=m.start(), source=m.group(0))


def _format_product(sc: ProductShortcode) -> str:
    if sc.variant == DEFAULT_VARIANT:
        return f"[product:{sc.slug}]"
    return f"[product:{sc.slug},{sc.variant}]"


def _format_products(sc: ProductsShortcode) -> str:
    if sc.limit == DEFAULT_PRODUCTS_LIMIT:
        return f"[products:{sc.category_slug}]"
    return f"[products:{sc.category_slug},{sc.limit}]"


def _format_comparison(sc: ComparisonShortcode) -> str:
    return f"[comparison:{','.join(sc.slugs)}]"


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ShortcodeSyntax:
    kind: ShortcodeKind
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str]], Shortcode]
    format: Callable[..., str]


SHORTCODE_GRAMMAR: tuple[ShortcodeSyntax, ...] = (
    ShortcodeSyntax("product",    _PRODUCT_RE,    _build_product,    _format_product),
    ShortcodeSyntax("products",   _PRODUCTS_RE,   _build_products,   _format_products),
    ShortcodeSyntax("comparison", _COMPARISON_RE, _build_comparison, _format_comparison),
)

_BY_KIND = {syntax.kind: syntax for syntax in SHORTCODE_GRAMMAR}

# Tie-break rank for shortcodes that start at the same offset
PRIORITY: dict[str, int] = {syntax.kind: i for i, syntax in enumerate(SHORTCODE_GRAMMAR)}


# -----------------------------------------------------------------------------

def format_shortcode(shortcode: Shortcode) -> str:
    """Return the canonical bracket text for *shortcode*.

    Default values are omitted, so ``ProductShortcode("mouse")`` formats as
    ``[product:mouse]`` and ``ProductsShortcode("mice", limit=3)`` as
    ``[products:mice]``.
    """
    return _BY_KIND[shortcode.kind].format(shortcode)


def shortcode_text(shortcode: Shortcode) -> str:
    """Return the literal text *shortcode* occupies in its source document.

    Extracted shortcodes remember exactly what they were matched from
    (keyword case, an explicit ``,3`` limit, spaces in a comparison list);
    descriptors built by hand fall back to the canonical form.
    """
    return shortcode.source or format_shortcode(shortcode)


def parse_shortcode(text: str) -> Optional[Shortcode]:
    """Parse a single complete shortcode such as ``[product:mouse,compact]``.

    Returns ``None`` unless the whole of *text* (surrounding whitespace
    aside) is one recognised shortcode.
    """
    if not text:
        return None
    text = text.strip()
    for syntax in SHORTCODE_GRAMMAR:
        m = syntax.pattern.fullmatch(text)
        if m:
            return syntax.build(m)
    return None


def parse_shortcode_value(value: str) -> Optional[Shortcode]:
    """Parse an editor shortcode value, i.e. shortcode text without brackets.

    ``"products:keyboards,5"`` → ``ProductsShortcode("keyboards", limit=5)``
    """
    if not value:
        return None
    return parse_shortcode(f"[{value.strip()}]")


def shortcode_label(shortcode: Shortcode) -> str:
    """Human-readable label shown for a shortcode node in the editor."""
    if isinstance(shortcode, ProductShortcode):
        if shortcode.variant != DEFAULT_VARIANT:
            return f"Product: {shortcode.slug} ({shortcode.variant})"
        return f"Product: {shortcode.slug}"
    if isinstance(shortcode, ProductsShortcode):
        return f"Products: {shortcode.category_slug} (limit: {shortcode.limit})"
    return f"Comparison: {len(shortcode.slugs)} products"
