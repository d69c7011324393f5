"""
Content block parser
====================
Splits article / product-description HTML into an ordered list of blocks:
literal HTML spans and shortcode spans.  HTML between shortcodes is sliced
straight out of the input and never modified.

Usage::

    blocks = parse_content(article.body)
    for block in blocks:
        if isinstance(block, HtmlBlock):
            ...
        else:
            ...   # block.kind in {"product", "products", "comparison"}
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .extractor import extract_shortcodes
from .grammar import shortcode_text
from .models import ContentBlock, HtmlBlock, ShortcodeBlock

logger = logging.getLogger(__name__)


def parse_content(html: Optional[str], *, keep_whitespace: bool = False) -> list[ContentBlock]:
    """
    Parse *html* into blocks.

    Parameters
    ----------
    html : str
        Raw HTML content, possibly containing shortcodes.
    keep_whitespace : bool
        Whitespace-only gaps between shortcodes are dropped unless this is
        set.  With it set, joining the blocks back together always gives
        back *html* exactly.

    Returns
    -------
    list[ContentBlock]
        Empty for empty input; a single ``HtmlBlock`` holding the whole
        input when there are no shortcodes.
    """
    if not html:
        return []

    shortcodes = extract_shortcodes(html)
    if not shortcodes:
        return [HtmlBlock(content=html)]

    blocks: list[ContentBlock] = []
    last_end = 0

    for sc in shortcodes:
        if sc.position > last_end:
            _append_html(blocks, html[last_end:sc.position], keep_whitespace)
        blocks.append(ShortcodeBlock(shortcode=sc))
        last_end = sc.position + len(shortcode_text(sc))

    if last_end < len(html):
        _append_html(blocks, html[last_end:], keep_whitespace)

    logger.debug(
        "Parsed content into %d block(s) (%d shortcode(s))", len(blocks), len(shortcodes)
    )
    return blocks


def blocks_to_html(blocks: Iterable[ContentBlock]) -> str:
    """Join *blocks* back into text, writing each shortcode as it was found."""
    parts: list[str] = []
    for block in blocks:
        if isinstance(block, HtmlBlock):
            parts.append(block.content)
        else:
            parts.append(shortcode_text(block.shortcode))
    return "".join(parts)


# -----------------------------------------------------------------------------

def _append_html(blocks: list[ContentBlock], chunk: str, keep_whitespace: bool) -> None:
    if chunk.strip() or (keep_whitespace and chunk):
        blocks.append(HtmlBlock(content=chunk))
