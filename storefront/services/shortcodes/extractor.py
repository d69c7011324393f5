"""
Shortcode extractor
===================
Finds every shortcode in a piece of HTML and returns typed descriptors in
document order.

Anything bracket-shaped that the grammar does not recognise is simply not
matched, so it stays in the content as literal text; nothing here raises.
"""

from __future__ import annotations

import logging
from typing import Collection, Optional

from .grammar import PRIORITY, SHORTCODE_GRAMMAR
from .models import (
    ComparisonShortcode,
    MissingReferences,
    ProductShortcode,
    ProductsShortcode,
    Shortcode,
    ShortcodeReferences,
)

logger = logging.getLogger(__name__)


def extract_shortcodes(html: Optional[str]) -> list[Shortcode]:
    """
    Return all shortcodes in *html*, ordered by position.

    Each grammar pattern scans the whole string on its own; the union is
    then sorted by start offset, falling back to grammar order on ties.
    """
    if not html:
        return []

    found: list[Shortcode] = []
    for syntax in SHORTCODE_GRAMMAR:
        for match in syntax.pattern.finditer(html):
            found.append(syntax.build(match))

    found.sort(key=lambda sc: (sc.position, PRIORITY[sc.kind]))
    logger.debug("Extracted %d shortcode(s) from %d chars", len(found), len(html))
    return found


def extract_shortcode_references(html: Optional[str]) -> ShortcodeReferences:
    """
    Collect the distinct product and category slugs referenced by *html*.

    Lets a caller fetch every record a page needs in one query instead of
    one per shortcode.  Comparison slugs count as product references.
    """
    product_slugs: set[str] = set()
    category_slugs: set[str] = set()

    for sc in extract_shortcodes(html):
        if isinstance(sc, ProductShortcode):
            product_slugs.add(sc.slug)
        elif isinstance(sc, ProductsShortcode):
            category_slugs.add(sc.category_slug)
        elif isinstance(sc, ComparisonShortcode):
            product_slugs.update(sc.slugs)

    return ShortcodeReferences(
        product_slugs=frozenset(product_slugs),
        category_slugs=frozenset(category_slugs),
    )


def validate_shortcodes(
    html: Optional[str],
    product_slugs: Collection[str],
    category_slugs: Collection[str],
) -> MissingReferences:
    """Report referenced slugs that are absent from the known slug sets."""
    refs = extract_shortcode_references(html)
    known_products = set(product_slugs)
    known_categories = set(category_slugs)
    return MissingReferences(
        missing_products=tuple(sorted(refs.product_slugs - known_products)),
        missing_categories=tuple(sorted(refs.category_slugs - known_categories)),
    )
