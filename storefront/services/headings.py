"""
Heading anchors
---------------
Gives ``<h2>`` / ``<h3>`` elements stable ``id`` attributes so the article
table of contents can link to them, and extracts the same headings as TOC
data.

    <h2>Best Gaming Mice (2025)!</h2>
    → <h2 id="best-gaming-mice-2025">Best Gaming Mice (2025)!</h2>

Existing ``id`` attributes are never touched, and every ``id`` already in
the document is reserved wherever it appears.  Repeated headings get a
numeric suffix (``setup``, ``setup-1``, ...), bumped until the id is free,
so no generated anchor repeats another.  ``extract_headings`` reports
exactly the ids ``add_heading_ids`` writes.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Iterator, Optional

_HEADING_RE = re.compile(
    r'<h([23])((?:\s[^>]*)?)>(.*?)</h\1\s*>',
    re.IGNORECASE | re.DOTALL,
)
_ID_ATTR_RE = re.compile(
    r'(?<=\s)id(?=[\s=/>]|$)(?:\s*=\s*["\']?([^"\'\s>]*))?', re.IGNORECASE
)
_TAG_RE = re.compile(r'<[^>]+>')
_NON_ALNUM_RE = re.compile(r'[^a-z0-9]+')


@dataclass
class Heading:
    level: int
    text: str
    anchor: str


def generate_heading_id(text: str) -> str:
    """Convert heading text to a URL-safe id: ``"Top 10 Mice!"`` → ``"top-10-mice"``."""
    return _NON_ALNUM_RE.sub("-", text.lower()).strip("-")


def heading_text(inner_html: str) -> str:
    """Plain text of a heading's inner HTML (tags stripped, entities decoded)."""
    text = html.unescape(_TAG_RE.sub("", inner_html))
    return " ".join(text.split())


def add_heading_ids(content: Optional[str]) -> str:
    """Return *content* with an ``id`` added to every h2/h3 that lacks one."""
    if not content:
        return content or ""

    parts: list[str] = []
    last_end = 0
    for m, existing, anchor in _scan(content):
        if existing is not None or not anchor:
            continue
        # m.start(3) - 1 is the ">" closing the opening tag
        open_end = m.start(3) - 1
        parts.append(content[last_end:open_end])
        parts.append(f' id="{anchor}"')
        last_end = open_end

    parts.append(content[last_end:])
    return "".join(parts)


def extract_headings(content: Optional[str]) -> list[Heading]:
    """Return the h2/h3 headings of *content* in document order."""
    if not content:
        return []

    headings: list[Heading] = []
    for m, existing, anchor in _scan(content):
        text = heading_text(m.group(3))
        anchor = existing if existing is not None else anchor
        if not text or not anchor:
            continue
        headings.append(Heading(level=int(m.group(1)), text=text, anchor=anchor))
    return headings


def render_toc(headings: list[Heading], title: str = "") -> str:
    """Render *headings* as a nested-by-indent table of contents list."""
    if not headings:
        return ""

    base_level = min(h.level for h in headings)
    lines = ['<nav class="article-toc">']
    if title:
        lines.append(f'  <div class="article-toc-title">{html.escape(title)}</div>')
    lines.append('  <ul>')
    for h in headings:
        indent = "    " * (h.level - base_level)
        lines.append(
            f'{indent}  <li class="toc-level-{h.level}">'
            f'<a href="#{html.escape(h.anchor)}">{html.escape(h.text)}</a></li>'
        )
    lines.append('  </ul>')
    lines.append('</nav>')
    return "\n".join(lines)


# -----------------------------------------------------------------------------

def _scan(content: str) -> Iterator[tuple[re.Match[str], Optional[str], str]]:
    """
    Yield ``(match, existing_id, anchor)`` for each h2/h3.

    *anchor* is the generated id; it is only meaningful when *existing_id*
    is ``None``.  Generated ids never repeat one another or any ``id``
    already present in *content*.
    """
    reserved = _existing_ids(content)
    issued: set[str] = set()
    for m in _HEADING_RE.finditer(content):
        id_match = _ID_ATTR_RE.search(m.group(2))
        if id_match:
            existing = id_match.group(1) or ""
            yield m, existing, existing
            continue

        anchor = base = generate_heading_id(heading_text(m.group(3)))
        if anchor:
            suffix = 0
            while anchor in reserved or anchor in issued:
                suffix += 1
                anchor = f"{base}-{suffix}"
            issued.add(anchor)
        yield m, None, anchor


def _existing_ids(content: str) -> set[str]:
    ids: set[str] = set()
    for tag in _TAG_RE.finditer(content):
        m = _ID_ATTR_RE.search(tag.group(0))
        if m and m.group(1):
            ids.add(m.group(1))
    return ids
