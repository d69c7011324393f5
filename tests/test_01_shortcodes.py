"""
Shortcode grammar & extractor tests
===================================
Tests for:
  - [product:...], [products:...], [comparison:...] extraction
  - Keyword case-insensitivity, verbatim slugs
  - Malformed shortcode text left alone
  - Position ordering
  - Reference extraction and validation
  - Canonical formatting, editor value parsing and labels

Run with:  pytest tests/test_01_shortcodes.py -v
"""

from __future__ import annotations

import pytest

from storefront.services.shortcodes import (
    ComparisonShortcode,
    ProductShortcode,
    ProductsShortcode,
    extract_shortcode_references,
    extract_shortcodes,
    format_shortcode,
    parse_shortcode,
    parse_shortcode_value,
    shortcode_label,
    shortcode_text,
    validate_shortcodes,
)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. Single shortcodes
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestProductShortcode:
    def test_default_variant(self):
        assert extract_shortcodes("[product:wireless-mouse]") == [
            ProductShortcode(slug="wireless-mouse", variant="default", position=0)
        ]

    def test_featured_variant(self):
        [sc] = extract_shortcodes("[product:wireless-mouse,featured]")
        assert sc.variant == "featured"

    def test_variant_lower_cased(self):
        [sc] = extract_shortcodes("[product:wireless-mouse,COMPACT]")
        assert sc.variant == "compact"

    def test_unknown_variant_kept(self):
        [sc] = extract_shortcodes("[product:wireless-mouse,huge]")
        assert sc.variant == "huge"

    def test_keyword_case_insensitive(self):
        [sc] = extract_shortcodes("[Product:wireless-mouse]")
        assert sc.slug == "wireless-mouse"

    def test_slug_is_case_sensitive(self):
        assert extract_shortcodes("[product:Wireless-Mouse]") == []

    def test_source_is_recorded(self):
        [sc] = extract_shortcodes("x [PRODUCT:mouse,Featured] y")
        assert sc.source == "[PRODUCT:mouse,Featured]"
        assert sc.position == 2


class TestProductsShortcode:
    def test_explicit_limit(self):
        assert extract_shortcodes("[products:keyboards,5]") == [
            ProductsShortcode(category_slug="keyboards", limit=5, position=0)
        ]

    def test_default_limit(self):
        [sc] = extract_shortcodes("[products:keyboards]")
        assert sc.limit == 3

    def test_zero_limit_falls_back_to_default(self):
        [sc] = extract_shortcodes("[products:keyboards,0]")
        assert sc.limit == 3

    def test_non_numeric_limit_not_matched(self):
        assert extract_shortcodes("[products:keyboards,lots]") == []

    def test_products_is_not_a_product(self):
        [sc] = extract_shortcodes("[products:mice]")
        assert isinstance(sc, ProductsShortcode)


class TestComparisonShortcode:
    def test_two_slugs(self):
        assert extract_shortcodes("[comparison:mouse-a,mouse-b]") == [
            ComparisonShortcode(slugs=("mouse-a", "mouse-b"), position=0)
        ]

    def test_three_slugs_keep_order(self):
        [sc] = extract_shortcodes("[comparison:c,a,b]")
        assert sc.slugs == ("c", "a", "b")

    def test_whitespace_trimmed(self):
        [sc] = extract_shortcodes("[comparison: mouse-a , mouse-b ]")
        assert sc.slugs == ("mouse-a", "mouse-b")
        assert sc.source == "[comparison: mouse-a , mouse-b ]"

    def test_single_slug_still_extracted(self):
        [sc] = extract_shortcodes("[comparison:mouse-a]")
        assert sc.slugs == ("mouse-a",)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. Documents
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestExtractShortcodes:
    def test_empty(self):
        assert extract_shortcodes("") == []

    def test_none(self):
        assert extract_shortcodes(None) == []

    def test_no_shortcodes(self):
        assert extract_shortcodes("<p>Just [some] text.</p>") == []

    def test_sorted_by_position(self):
        html = "<p>Intro</p>[comparison:a,b]<p>Mid</p>[products:mice,2][product:x]"
        found = extract_shortcodes(html)
        assert [sc.kind for sc in found] == ["comparison", "products", "product"]
        assert [sc.position for sc in found] == sorted(sc.position for sc in found)
        assert found[0].position == 12

    def test_positions_point_at_bracket(self):
        html = "<p>A</p>[product:a] and [products:b]"
        for sc in extract_shortcodes(html):
            assert html[sc.position] == "["
            assert html.startswith(shortcode_text(sc), sc.position)

    @pytest.mark.parametrize("text", [
        "[product:]",
        "[product:mouse",
        "product:mouse]",
        "[product mouse]",
        "[product:mouse,]",
        "[product:mouse_pad]",
        "[products:]",
        "[comparison:]",
        "[comparison:a,,b]",
        "[widget:mouse]",
    ])
    def test_malformed_left_alone(self, text):
        assert extract_shortcodes(f"<p>{text}</p>") == []

    def test_repeated_shortcode(self):
        found = extract_shortcodes("[product:a] [product:a]")
        assert [sc.position for sc in found] == [0, 12]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 3. References & validation
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestReferences:
    def test_empty(self):
        refs = extract_shortcode_references("")
        assert refs.product_slugs == frozenset()
        assert refs.category_slugs == frozenset()

    def test_deduplicated(self):
        html = "[product:a][product:a,compact][comparison:a,b][products:mice][products:mice,6]"
        refs = extract_shortcode_references(html)
        assert refs.product_slugs == {"a", "b"}
        assert refs.category_slugs == {"mice"}

    def test_validate_reports_missing(self):
        html = "[product:a][comparison:a,ghost][products:mice][products:void]"
        missing = validate_shortcodes(html, {"a"}, ["mice"])
        assert missing.missing_products == ("ghost",)
        assert missing.missing_categories == ("void",)
        assert not missing.ok

    def test_validate_all_known(self):
        missing = validate_shortcodes("[product:a]", ["a"], [])
        assert missing.ok


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 4. Formatting, editor values, labels
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestFormatting:
    def test_default_variant_omitted(self):
        assert format_shortcode(ProductShortcode(slug="mouse")) == "[product:mouse]"

    def test_variant_included(self):
        assert format_shortcode(ProductShortcode(slug="mouse", variant="compact")) == "[product:mouse,compact]"

    def test_default_limit_omitted(self):
        assert format_shortcode(ProductsShortcode(category_slug="mice")) == "[products:mice]"

    def test_limit_included(self):
        assert format_shortcode(ProductsShortcode(category_slug="mice", limit=8)) == "[products:mice,8]"

    def test_comparison(self):
        assert format_shortcode(ComparisonShortcode(slugs=("a", "b", "c"))) == "[comparison:a,b,c]"

    @pytest.mark.parametrize("text", [
        "[product:wireless-mouse]",
        "[product:wireless-mouse,featured]",
        "[products:keyboards]",
        "[products:keyboards,5]",
        "[comparison:mouse-a,mouse-b]",
        "[comparison:mouse-a,mouse-b,mouse-c]",
    ])
    def test_canonical_text_round_trips(self, text):
        assert format_shortcode(parse_shortcode(text)) == text

    def test_shortcode_text_prefers_source(self):
        [sc] = extract_shortcodes("[PRODUCTS:mice,3]")
        assert shortcode_text(sc) == "[PRODUCTS:mice,3]"
        assert format_shortcode(sc) == "[products:mice]"

    def test_shortcode_text_falls_back_to_canonical(self):
        assert shortcode_text(ProductShortcode(slug="x", variant="featured")) == "[product:x,featured]"


class TestEditorValues:
    def test_parse_value(self):
        sc = parse_shortcode_value("products:keyboards,5")
        assert sc == ProductsShortcode(category_slug="keyboards", limit=5)

    def test_parse_value_invalid(self):
        assert parse_shortcode_value("widget:thing") is None
        assert parse_shortcode_value("") is None

    def test_parse_shortcode_requires_whole_text(self):
        assert parse_shortcode("[product:a] trailing") is None

    def test_labels(self):
        assert shortcode_label(ProductShortcode(slug="m")) == "Product: m"
        assert shortcode_label(ProductShortcode(slug="m", variant="featured")) == "Product: m (featured)"
        assert shortcode_label(ProductsShortcode(category_slug="mice", limit=4)) == "Products: mice (limit: 4)"
        assert shortcode_label(ComparisonShortcode(slugs=("a", "b"))) == "Comparison: 2 products"
