#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Content router
==============
POST   /api/v1/content/parse            : split content into blocks
POST   /api/v1/content/references       : product / category slugs used
POST   /api/v1/content/validate         : slugs that cannot be resolved
POST   /api/v1/content/autolink         : link product / category mentions
POST   /api/v1/content/autolink/remove  : strip auto-links again
POST   /api/v1/content/headings         : add heading ids, list headings
POST   /api/v1/content/render           : full storefront render
POST   /api/v1/content/shortcode        : describe an editor shortcode value

Lets the admin preview and the storefront share one content pipeline.
Callers send pre-fetched catalogue data with the content; nothing here
touches the database.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from storefront.core.config import Settings, get_settings
from storefront.schemas import (
    AutoLinkRequest,
    AutoLinkResponse,
    BlockOut,
    ContentRequest,
    HeadingOut,
    HeadingsResponse,
    ParseRequest,
    ParseResponse,
    ReferencesResponse,
    RenderRequest,
    RenderResponse,
    ShortcodeOut,
    ShortcodeValueRequest,
    ValidateRequest,
    ValidateResponse,
)
from storefront.services.autolink import (
    AutoLinker,
    LinkableItem,
    category_to_linkable,
    count_auto_links,
    product_to_linkable,
    remove_auto_links,
)
from storefront.services.headings import Heading, add_heading_ids, extract_headings
from storefront.services.renderer import RenderContext, RenderPipeline
from storefront.services.shortcodes import (
    ComparisonShortcode,
    HtmlBlock,
    ProductShortcode,
    Shortcode,
    extract_shortcode_references,
    format_shortcode,
    parse_content,
    parse_shortcode_value,
    shortcode_label,
    shortcode_text,
    validate_shortcodes,
)

# -----------------------------------------------------------------------------

router = APIRouter(prefix="/content", tags=["content"])


# -----------------------------------------------------------------------------

@router.post("/parse", response_model=ParseResponse)
async def parse(data: ParseRequest, settings: Settings = Depends(get_settings)):
    _check_size(data.content, settings)
    blocks = []
    for block in parse_content(data.content, keep_whitespace=data.keep_whitespace):
        if isinstance(block, HtmlBlock):
            blocks.append(BlockOut(type="html", content=block.content))
        else:
            blocks.append(BlockOut(type=block.kind, shortcode=_shortcode_out(block.shortcode)))
    return ParseResponse(blocks=blocks)


# -----------------------------------------------------------------------------

@router.post("/references", response_model=ReferencesResponse)
async def references(data: ContentRequest, settings: Settings = Depends(get_settings)):
    _check_size(data.content, settings)
    refs = extract_shortcode_references(data.content)
    return ReferencesResponse(
        product_slugs=sorted(refs.product_slugs),
        category_slugs=sorted(refs.category_slugs),
    )


# -----------------------------------------------------------------------------

@router.post("/validate", response_model=ValidateResponse)
async def validate(data: ValidateRequest, settings: Settings = Depends(get_settings)):
    _check_size(data.content, settings)
    missing = validate_shortcodes(data.content, data.product_slugs, data.category_slugs)
    return ValidateResponse(
        ok=missing.ok,
        missing_products=list(missing.missing_products),
        missing_categories=list(missing.missing_categories),
    )


# -----------------------------------------------------------------------------

@router.post("/autolink", response_model=AutoLinkResponse)
async def autolink(data: AutoLinkRequest, settings: Settings = Depends(get_settings)):
    _check_size(data.content, settings)
    items = [
        *(product_to_linkable(p) for p in data.products),
        *(category_to_linkable(c) for c in data.categories),
        *(LinkableItem(slug=i.slug, name=i.name, type=i.type) for i in data.items),
    ]
    cap = data.max_links_per_term or settings.max_links_per_term
    content = AutoLinker(data.site_slug, items, cap).process(data.content)
    return AutoLinkResponse(content=content, link_count=count_auto_links(content))


# -----------------------------------------------------------------------------

@router.post("/autolink/remove", response_model=AutoLinkResponse)
async def autolink_remove(data: ContentRequest, settings: Settings = Depends(get_settings)):
    _check_size(data.content, settings)
    content = remove_auto_links(data.content)
    return AutoLinkResponse(content=content, link_count=count_auto_links(content))


# -----------------------------------------------------------------------------

@router.post("/headings", response_model=HeadingsResponse)
async def headings(data: ContentRequest, settings: Settings = Depends(get_settings)):
    _check_size(data.content, settings)
    content = add_heading_ids(data.content)
    return HeadingsResponse(
        content=content,
        headings=[_heading_out(h) for h in extract_headings(content)],
    )


# -----------------------------------------------------------------------------

@router.post("/render", response_model=RenderResponse)
async def render(data: RenderRequest, settings: Settings = Depends(get_settings)):
    _check_size(data.content, settings)
    ctx = RenderContext(
        site_slug=data.site_slug,
        products={p.slug: p for p in data.products},
        category_products=data.category_products,
        link_items=[
            *(product_to_linkable(p) for p in data.all_products),
            *(category_to_linkable(c) for c in data.all_categories),
        ],
        enable_auto_link=settings.auto_link_enabled if data.enable_auto_link is None else data.enable_auto_link,
        class_name=data.class_name,
        toc_title=data.toc_title,
    )
    result = RenderPipeline(settings).render(data.content, ctx)
    return RenderResponse(
        html=result.html,
        headings=[_heading_out(h) for h in result.headings],
        toc=result.toc,
        block_count=len(result.blocks),
    )


# -----------------------------------------------------------------------------

@router.post("/shortcode", response_model=ShortcodeOut)
async def shortcode(data: ShortcodeValueRequest):
    """Parse an editor value such as ``products:keyboards,5``."""
    sc = parse_shortcode_value(data.value)
    if sc is None:
        raise HTTPException(status_code=422, detail=f"Unrecognised shortcode '{data.value}'")
    out = _shortcode_out(sc)
    out.text = format_shortcode(sc)
    return out


# -----------------------------------------------------------------------------

def _check_size(content: str, settings: Settings) -> None:
    if len(content) > settings.max_content_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Content exceeds {settings.max_content_chars} characters",
        )


def _shortcode_out(sc: Shortcode) -> ShortcodeOut:
    out = ShortcodeOut(
        type=sc.kind, position=sc.position, text=shortcode_text(sc), label=shortcode_label(sc),
    )
    if isinstance(sc, ProductShortcode):
        out.slug, out.variant = sc.slug, sc.variant
    elif isinstance(sc, ComparisonShortcode):
        out.slugs = list(sc.slugs)
    else:
        out.category_slug, out.limit = sc.category_slug, sc.limit
    return out


def _heading_out(h: Heading) -> HeadingOut:
    return HeadingOut(id=h.anchor, text=h.text, level=h.level)
