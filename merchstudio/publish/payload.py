"""
Catalog Product Payload

Materializes a Draft into the Shopify Admin product shape:
- title / body_html / vendor / product_type / handle
- tags: draft tags + brand + mascot name
- variants with option slots, price and SKU
- options, images, SEO fields
- metafields: draft metafields + brand_book / mascot_id under "technodog"
- collection_ids: collections to join once the product exists
"""

import re
from typing import Any, Dict, List

from merchstudio.draft.models import Draft
from merchstudio.variants.generate import build_options

METAFIELD_NAMESPACE = "technodog"
TEXT_FIELD = "single_line_text_field"
MULTILINE_FIELD = "multi_line_text_field"
MAX_SINGLE_LINE = 255

# Not part of the product resource; the catalog assigns these after create
COLLECTIONS_KEY = "collection_ids"

_HANDLE_STRIP = re.compile(r"[^a-z0-9]+")


def slugify_handle(title: str) -> str:
    """Shopify-style handle: lowercase, hyphen separated."""
    return _HANDLE_STRIP.sub("-", title.lower()).strip("-")


def _body_html(description: str) -> str:
    if not description:
        return ""
    if description.lstrip().startswith("<"):
        return description
    paragraphs = [p.strip() for p in description.split("\n") if p.strip()]
    return "".join(f"<p>{p}</p>" for p in paragraphs)


def _metafield(key: str, value: str) -> Dict[str, Any]:
    return {
        "namespace": METAFIELD_NAMESPACE,
        "key": key,
        "value": value,
        "type": TEXT_FIELD if len(value) <= MAX_SINGLE_LINE else MULTILINE_FIELD,
    }


def build_metafields_payload(draft: Draft) -> List[Dict[str, Any]]:
    metafields = [m.model_dump() for m in draft.metafields]
    taken = {(m["namespace"], m["key"]) for m in metafields}
    if draft.brand is not None and (METAFIELD_NAMESPACE, "brand_book") not in taken:
        metafields.append(_metafield("brand_book", draft.brand.value))
    if draft.mascot_id and (METAFIELD_NAMESPACE, "mascot_id") not in taken:
        metafields.append(_metafield("mascot_id", draft.mascot_id))
    if draft.color_line is not None and (METAFIELD_NAMESPACE, "color_line") not in taken:
        metafields.append(_metafield("color_line", draft.color_line.value))
    return metafields


def build_tags(draft: Draft) -> List[str]:
    tags = list(draft.copy_fields.tags)
    if draft.brand is not None:
        tags.append(draft.brand.value)
    if draft.mascot_name:
        tags.append(draft.mascot_name)
    return list(dict.fromkeys(t for t in tags if t))


def build_product_payload(draft: Draft) -> Dict[str, Any]:
    """
    Build the create-product payload for a draft.

    The variant list is sent fully materialized; the catalog never expands
    options on its own.
    """
    copy = draft.copy_fields
    handle = copy.handle or slugify_handle(copy.title)

    payload: Dict[str, Any] = {
        "title": copy.title,
        "body_html": _body_html(copy.description),
        "vendor": copy.vendor,
        "product_type": draft.product_type,
        "handle": handle,
        "status": "active",
        "tags": ", ".join(build_tags(draft)),
        "variants": [
            {
                "title": v.title,
                "price": str(v.price),
                "compare_at_price": str(v.compare_at_price) if v.compare_at_price is not None else None,
                "sku": v.sku,
                "option1": v.option1,
                "option2": v.option2,
                "option3": v.option3,
                "weight": v.weight,
                "weight_unit": v.weight_unit,
                "inventory_management": "shopify",
                "requires_shipping": v.requires_shipping,
            }
            for v in draft.variants
        ],
        "metafields": build_metafields_payload(draft),
    }

    options = build_options(draft.dimensions, draft.selection)
    if options:
        payload["options"] = [o.model_dump() for o in options]

    if draft.images:
        payload["images"] = [
            {"src": img.src, "alt": img.alt, "position": img.position or i + 1}
            for i, img in enumerate(draft.images)
        ]

    if copy.seo_title:
        payload["metafields_global_title_tag"] = copy.seo_title
    if copy.seo_description:
        payload["metafields_global_description_tag"] = copy.seo_description

    if draft.collection_ids:
        payload[COLLECTIONS_KEY] = list(dict.fromkeys(draft.collection_ids))

    return payload
