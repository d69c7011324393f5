"""
Shortcode subsystem: public API.
"""

from .models import (
    ComparisonShortcode,
    ContentBlock,
    HtmlBlock,
    MissingReferences,
    ProductShortcode,
    ProductsShortcode,
    Shortcode,
    ShortcodeBlock,
    ShortcodeReferences,
)
from .grammar import (
    format_shortcode,
    parse_shortcode,
    parse_shortcode_value,
    shortcode_label,
    shortcode_text,
)
from .extractor import extract_shortcode_references, extract_shortcodes, validate_shortcodes
from .parser import blocks_to_html, parse_content

__all__ = [
    "ComparisonShortcode",
    "ContentBlock",
    "HtmlBlock",
    "MissingReferences",
    "ProductShortcode",
    "ProductsShortcode",
    "Shortcode",
    "ShortcodeBlock",
    "ShortcodeReferences",
    "blocks_to_html",
    "extract_shortcode_references",
    "extract_shortcodes",
    "format_shortcode",
    "parse_content",
    "parse_shortcode",
    "parse_shortcode_value",
    "shortcode_label",
    "shortcode_text",
    "validate_shortcodes",
]
