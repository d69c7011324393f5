"""
Shortcode and content-block types.

Every object here is built fresh by a single extract/parse call and
discarded once the caller has rendered it.  ``position`` is the offset of
the opening ``[`` in the string that was scanned; ``source`` is the exact
literal text that was matched there.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal, Union

ShortcodeKind = Literal["product", "products", "comparison"]

DEFAULT_VARIANT = "default"
PRODUCT_VARIANTS = ("default", "compact", "featured")
DEFAULT_PRODUCTS_LIMIT = 3


@dataclass(frozen=True)
class ProductShortcode:
    slug: str
    variant: str = DEFAULT_VARIANT
    position: int = 0
    source: str = field(default="", compare=False, repr=False)

    kind: ClassVar[ShortcodeKind] = "product"


@dataclass(frozen=True)
class ProductsShortcode:
    category_slug: str
    limit: int = DEFAULT_PRODUCTS_LIMIT
    position: int = 0
    source: str = field(default="", compare=False, repr=False)

    kind: ClassVar[ShortcodeKind] = "products"


@dataclass(frozen=True)
class ComparisonShortcode:
    slugs: tuple[str, ...]
    position: int = 0
    source: str = field(default="", compare=False, repr=False)

    kind: ClassVar[ShortcodeKind] = "comparison"


Shortcode = Union[ProductShortcode, ProductsShortcode, ComparisonShortcode]


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HtmlBlock:
    """A literal, unmodified slice of the parsed HTML."""

    content: str

    type: ClassVar[str] = "html"


@dataclass(frozen=True)
class ShortcodeBlock:
    """A shortcode occurrence, to be resolved by the rendering layer."""

    shortcode: Shortcode

    @property
    def kind(self) -> ShortcodeKind:
        return self.shortcode.kind

    @property
    def type(self) -> str:
        return self.shortcode.kind


ContentBlock = Union[HtmlBlock, ShortcodeBlock]


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ShortcodeReferences:
    """Distinct slugs referenced by the shortcodes in a document."""

    product_slugs: frozenset[str] = frozenset()
    category_slugs: frozenset[str] = frozenset()


@dataclass(frozen=True)
class MissingReferences:
    missing_products: tuple[str, ...] = ()
    missing_categories: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not (self.missing_products or self.missing_categories)
