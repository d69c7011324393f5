"""
Product / category auto-linker subsystem.
"""

from .linker import (
    AUTO_LINK_CLASS,
    AutoLinker,
    LinkableItem,
    auto_link_content,
    category_to_linkable,
    count_auto_links,
    product_to_linkable,
    remove_auto_links,
)
from .regions import ProtectedRegion, RegionSet, find_protected_regions, merge_regions

__all__ = [
    "AUTO_LINK_CLASS",
    "AutoLinker",
    "LinkableItem",
    "ProtectedRegion",
    "RegionSet",
    "auto_link_content",
    "category_to_linkable",
    "count_auto_links",
    "find_protected_regions",
    "merge_regions",
    "product_to_linkable",
    "remove_auto_links",
]
