"""
Product / category auto-linker
==============================
Wraps mentions of known product and category names in links to their
storefront pages, for internal linking.

Rules
-----
1. Matching is case-insensitive and whole-word: the match may not be
   preceded or followed by a word character, so "Mouse" never links inside
   "Mousetrap".  Names are regex-escaped.

2. Each distinct name (case-insensitive) is linked at most
   ``max_links_per_term`` times per document, first occurrences first.

3. Longer names are placed first.  Text already claimed by "Gaming Mouse
   Pro X" cannot then be linked as "Gaming Mouse".

4. Nothing inside a protected region is rewritten: existing links,
   headings, code, scripts, styles, comments, and tag markup itself.

5. Running the linker again with the same items leaves the output alone.
   Existing auto-links sit in protected regions and count toward their
   term's cap.

Links look like::

    <a href="/{site}/products/{slug}" class="auto-link auto-link-product">Name</a>
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from .regions import RegionSet, find_protected_regions

logger = logging.getLogger(__name__)

AUTO_LINK_CLASS = "auto-link"

LinkableType = Literal["product", "category"]

_ANCHOR_RE = re.compile(r'<a\b([^>]*)>(.*?)</a\s*>', re.IGNORECASE | re.DOTALL)
_ANCHOR_OPEN_RE = re.compile(r'<a\b([^>]*)>', re.IGNORECASE)
_CLASS_ATTR_RE = re.compile(
    r'(?<![\w-])class\s*=\s*(?:"([^"]*)"|\'([^\']*)\'|([^\s>]+))',
    re.IGNORECASE,
)
_TAG_RE = re.compile(r'<[^>]+>')


@dataclass(frozen=True)
class LinkableItem:
    slug: str
    name: str
    type: LinkableType


def product_to_linkable(product) -> LinkableItem:
    """Build a LinkableItem from anything with ``slug`` and ``title``."""
    return LinkableItem(slug=product.slug, name=product.title, type="product")


def category_to_linkable(category) -> LinkableItem:
    """Build a LinkableItem from anything with ``slug`` and ``name``."""
    return LinkableItem(slug=category.slug, name=category.name, type="category")


# -----------------------------------------------------------------------------

class AutoLinker:
    """
    Link product and category mentions in a piece of HTML.

    Parameters
    ----------
    site_slug : str
        Slug of the site the content belongs to; prefixes every link.
    items : iterable of LinkableItem
        Products and categories that may be linked.
    max_links_per_term : int
        How many times each distinct name may be linked (default 1).
    """

    def __init__(
        self,
        site_slug: str,
        items: Iterable[LinkableItem],
        max_links_per_term: int = 1,
    ) -> None:
        self.site_slug = site_slug.strip("/")
        self.max_links_per_term = max_links_per_term
        # Stable sort keeps caller order among equal-length names.
        self.items = sorted(
            (item for item in items if item.name and item.name.strip()),
            key=lambda item: len(item.name.strip()),
            reverse=True,
        )

    def url_for(self, item: LinkableItem) -> str:
        section = "products" if item.type == "product" else "categories"
        return f"/{self.site_slug}/{section}/{item.slug}"

    def process(self, content: Optional[str]) -> str:
        """Return *content* with item names linked."""
        if not content:
            return content or ""
        if not self.items or self.max_links_per_term < 1:
            return content

        protected = RegionSet(find_protected_regions(content))
        claimed = RegionSet()
        counts = _existing_link_counts(content)
        links: list[tuple[int, int, LinkableItem]] = []

        for item in self.items:
            name = item.name.strip()
            key = name.lower()
            if counts.get(key, 0) >= self.max_links_per_term:
                continue

            pattern = re.compile(r'(?<!\w)' + re.escape(name) + r'(?!\w)', re.IGNORECASE)
            for m in pattern.finditer(content):
                start, end = m.span()
                if protected.overlaps(start, end) or claimed.overlaps(start, end):
                    continue
                claimed.add(start, end)
                links.append((start, end, item))
                counts[key] = counts.get(key, 0) + 1
                if counts[key] >= self.max_links_per_term:
                    break

        if not links:
            return content

        links.sort(key=lambda link: link[0])
        parts: list[str] = []
        last_end = 0
        for start, end, item in links:
            parts.append(content[last_end:start])
            parts.append(self._anchor(item, content[start:end]))
            last_end = end
        parts.append(content[last_end:])

        logger.debug("Auto-linked %d mention(s) for site %s", len(links), self.site_slug)
        return "".join(parts)

    def _anchor(self, item: LinkableItem, label: str) -> str:
        href = html.escape(self.url_for(item), quote=True)
        css_class = f"{AUTO_LINK_CLASS} {AUTO_LINK_CLASS}-{item.type}"
        return f'<a href="{href}" class="{css_class}">{label}</a>'


# -----------------------------------------------------------------------------

def auto_link_content(
    content: Optional[str],
    *,
    site_slug: str,
    products: Iterable[LinkableItem] = (),
    categories: Iterable[LinkableItem] = (),
    max_links_per_term: int = 1,
) -> str:
    """Convenience wrapper: link *products* and *categories* in *content*."""
    items = [*products, *categories]
    return AutoLinker(site_slug, items, max_links_per_term).process(content)


def remove_auto_links(content: Optional[str]) -> str:
    """Unwrap every auto-link anchor, keeping its text."""
    if not content:
        return content or ""

    def _replace(m: re.Match[str]) -> str:
        return m.group(2) if _is_auto_link(m.group(1)) else m.group(0)

    return _ANCHOR_RE.sub(_replace, content)


def count_auto_links(content: Optional[str]) -> int:
    """Number of auto-link anchors in *content*."""
    if not content:
        return 0
    return sum(1 for m in _ANCHOR_OPEN_RE.finditer(content) if _is_auto_link(m.group(1)))


# -----------------------------------------------------------------------------

def _is_auto_link(attrs: str) -> bool:
    m = _CLASS_ATTR_RE.search(attrs)
    if not m:
        return False
    value = m.group(1) or m.group(2) or m.group(3) or ""
    return AUTO_LINK_CLASS in value.split()


def _existing_link_counts(content: str) -> dict[str, int]:
    """Count auto-links already present, keyed by lower-cased link text."""
    counts: dict[str, int] = {}
    for m in _ANCHOR_RE.finditer(content):
        if _is_auto_link(m.group(1)):
            key = " ".join(_TAG_RE.sub("", m.group(2)).split()).lower()
            counts[key] = counts.get(key, 0) + 1
    return counts
