"""
Protected regions
=================
Half-open ``[start, end)`` character intervals of HTML that the auto-linker
must not rewrite:

* the whole of ``<a>``, ``<h1>``-``<h6>``, ``<code>``, ``<pre>``,
  ``<script>`` and ``<style>`` elements,
* HTML comments and character references (``&amp;``, ``&#8217;``),
* every tag's own markup (tag name and attributes),
* shortcodes such as ``[product:slug]``.

Regions are collected per call, then merged with a sort-and-sweep so the
overlap test can binary-search a list of disjoint intervals.
"""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable

from storefront.services.shortcodes import extract_shortcodes, shortcode_text

SKIP_TAGS = ("a", "h1", "h2", "h3", "h4", "h5", "h6", "code", "pre", "script", "style")

_SKIP_ELEMENT_RE = re.compile(
    r'<(' + "|".join(SKIP_TAGS) + r')\b[^>]*>.*?</\1\s*>',
    re.IGNORECASE | re.DOTALL,
)
_COMMENT_RE = re.compile(r'<!--.*?-->', re.DOTALL)
_ENTITY_RE = re.compile(r"&(?:#[0-9]+|#x[0-9a-f]+|[a-z][a-z0-9]*);", re.IGNORECASE)
_TAG_RE = re.compile(r'<[^>]+>')


@dataclass(frozen=True)
class ProtectedRegion:
    start: int
    end: int


def merge_regions(regions: Iterable[ProtectedRegion]) -> list[ProtectedRegion]:
    """Coalesce overlapping or touching regions into a sorted disjoint list."""
    ordered = sorted(regions, key=lambda r: (r.start, r.end))
    if not ordered:
        return []

    merged = [ordered[0]]
    for current in ordered[1:]:
        last = merged[-1]
        if current.start <= last.end:
            if current.end > last.end:
                merged[-1] = ProtectedRegion(last.start, current.end)
        else:
            merged.append(current)
    return merged


def find_protected_regions(html: str) -> list[ProtectedRegion]:
    """Return the merged protected regions of *html*."""
    regions: list[ProtectedRegion] = []
    for pattern in (_SKIP_ELEMENT_RE, _COMMENT_RE, _TAG_RE, _ENTITY_RE):
        for m in pattern.finditer(html):
            regions.append(ProtectedRegion(m.start(), m.end()))
    for sc in extract_shortcodes(html):
        regions.append(ProtectedRegion(sc.position, sc.position + len(shortcode_text(sc))))
    return merge_regions(regions)


# -----------------------------------------------------------------------------

class RegionSet:
    """
    Sorted, disjoint intervals with an O(log n) overlap test.

    The linker keeps one for the protected regions and one for the spans it
    has already claimed, so a shorter name can never be linked inside a
    longer one.
    """

    def __init__(self, regions: Iterable[ProtectedRegion] = ()) -> None:
        self._regions = merge_regions(regions)
        self._starts = [r.start for r in self._regions]

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self):
        return iter(self._regions)

    def overlaps(self, start: int, end: int) -> bool:
        """True if ``[start, end)`` shares any character with a region.

        Covers a match inside a region, a region inside a match, and
        partial overlap on either side.
        """
        i = bisect_left(self._starts, end) - 1
        return i >= 0 and self._regions[i].end > start

    def add(self, start: int, end: int) -> None:
        """Insert a region that is known not to overlap any existing one."""
        i = bisect_left(self._starts, start)
        self._starts.insert(i, start)
        self._regions.insert(i, ProtectedRegion(start, end))
