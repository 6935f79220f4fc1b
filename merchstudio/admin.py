"""
Merch Studio Admin Endpoints
Read-only admin surface over the studio core: catalog browsing, variant
previews and compliance checks.

Auth: X-Admin-API-Key header required. The owner capability is granted only
when the key equals STUDIO_OWNER_API_KEY.

Endpoints:
- GET  /api/v1/admin/studio/health
- GET  /api/v1/admin/studio/archetypes
- GET  /api/v1/admin/studio/archetypes/{archetype_id}
- GET  /api/v1/admin/studio/guidelines/{brand}
- POST /api/v1/admin/studio/variants/preview
- POST /api/v1/admin/studio/compliance/validate
"""

import logging
import os
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Header, HTTPException, Query
from pydantic import BaseModel, Field

from merchstudio.catalog import (
    PRODUCT_CATALOG,
    Gender,
    ProductCategory,
    archetypes_by_category,
    category_label,
    default_dimensions,
    get_archetype,
    sizes_for_archetype,
)
from merchstudio.compliance import RULE_COUNT, Actor, ValidationReport, get_guideline, validate_draft
from merchstudio.draft.actions import SelectArchetype, SelectMaterial, SetMargin, SetSelection, SetSkuPolicy, SetSkuSeed
from merchstudio.draft.models import BrandIdentity, Draft
from merchstudio.draft.reducer import DraftError, UnknownArchetype, reduce_all, start_draft
from merchstudio.integrations.content_client import FunctionsContentService
from merchstudio.integrations.shopify_client import get_shopify_client
from merchstudio.variants import VariantGenerationError, build_options, calculate_price

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin/studio", tags=["studio-admin"])


def verify_admin_key(x_admin_api_key: Optional[str] = Header(None)) -> Actor:
    """Verify admin API key and return the caller's capability."""
    expected_key = os.getenv("ADMIN_API_KEY")
    owner_key = os.getenv("STUDIO_OWNER_API_KEY")
    if not expected_key and not owner_key:
        # If no key configured, block all access
        raise HTTPException(status_code=403, detail="Admin access not configured")
    if owner_key and x_admin_api_key == owner_key:
        return Actor(actor_id="owner", is_owner=True)
    if expected_key and x_admin_api_key == expected_key:
        return Actor(actor_id="admin", is_owner=False)
    raise HTTPException(status_code=403, detail="Invalid admin API key")


# ===== Request / response models =====

class ArchetypeSummary(BaseModel):
    id: str
    name: str
    category: str
    category_label: str
    base_price: Decimal
    has_sizes: bool
    has_gender: bool


class VariantPreviewRequest(BaseModel):
    archetype_id: str
    gender: Optional[Gender] = None
    material_id: Optional[str] = None
    selection: Dict[str, List[str]] = Field(default_factory=dict, description="Dimension name -> selected values")
    margin_pct: Decimal = Field(default=Decimal("40"))
    sku_policy: str = "simple"
    sku_seed: str = ""


class VariantPreviewResponse(BaseModel):
    archetype_id: str
    variant_count: int
    cost: Decimal
    price: Decimal
    profit: Decimal
    options: List[Dict[str, Any]]
    variants: List[Dict[str, Any]]


class ComplianceRequest(BaseModel):
    draft: Draft


def _summary(archetype) -> ArchetypeSummary:
    return ArchetypeSummary(
        id=archetype.id,
        name=archetype.name,
        category=archetype.category.value,
        category_label=category_label(archetype.category),
        base_price=archetype.base_price,
        has_sizes=archetype.has_sizes,
        has_gender=archetype.has_gender,
    )


# ===== HEALTH CHECK =====

@router.get("/health")
async def studio_health(x_admin_api_key: Optional[str] = Header(None)):
    """Configuration status of the studio and its collaborators."""
    verify_admin_key(x_admin_api_key)
    shopify = await get_shopify_client().health_check()
    return {
        "status": "healthy" if shopify.ok else "degraded",
        "archetypes": len(PRODUCT_CATALOG),
        "compliance_rules": RULE_COUNT,
        "shopify": shopify.model_dump(),
        "content_service_configured": FunctionsContentService().is_configured,
    }


# ===== CATALOG =====

@router.get("/archetypes", response_model=List[ArchetypeSummary])
async def list_archetypes(
    category: Optional[ProductCategory] = Query(None),
    x_admin_api_key: Optional[str] = Header(None),
):
    verify_admin_key(x_admin_api_key)
    archetypes = archetypes_by_category(category) if category else PRODUCT_CATALOG
    return [_summary(a) for a in archetypes]


@router.get("/archetypes/{archetype_id}")
async def get_archetype_detail(
    archetype_id: str,
    gender: Optional[Gender] = Query(None),
    x_admin_api_key: Optional[str] = Header(None),
):
    verify_admin_key(x_admin_api_key)
    archetype = get_archetype(archetype_id)
    if archetype is None:
        raise HTTPException(status_code=404, detail=f"Archetype not found: {archetype_id}")
    return {
        **_summary(archetype).model_dump(),
        "sizes": sizes_for_archetype(archetype, gender),
        "materials": [m.model_dump() for m in archetype.materials],
        "dimensions": [d.model_dump() for d in default_dimensions(archetype, gender)],
        "weight_grams": archetype.weight_grams,
    }


@router.get("/guidelines/{brand}")
async def get_brand_guideline(brand: BrandIdentity, x_admin_api_key: Optional[str] = Header(None)):
    verify_admin_key(x_admin_api_key)
    return get_guideline(brand).model_dump()


# ===== VARIANTS =====

@router.post("/variants/preview", response_model=VariantPreviewResponse)
async def preview_variants(request: VariantPreviewRequest, x_admin_api_key: Optional[str] = Header(None)):
    """Expand an archetype configuration into its variant matrix without creating a draft."""
    verify_admin_key(x_admin_api_key)

    actions = [SelectArchetype(archetype_id=request.archetype_id, gender=request.gender)]
    if request.material_id:
        actions.append(SelectMaterial(material_id=request.material_id))
    actions.append(SetSkuPolicy(policy=request.sku_policy))
    actions.append(SetMargin(margin_pct=request.margin_pct))
    for name, values in request.selection.items():
        actions.append(SetSelection(dimension=name, values=values))
    if request.sku_seed:
        actions.append(SetSkuSeed(seed=request.sku_seed))

    try:
        draft = reduce_all(start_draft(), actions)
    except UnknownArchetype as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (DraftError, VariantGenerationError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    breakdown = calculate_price(draft.pricing)
    return VariantPreviewResponse(
        archetype_id=draft.archetype_id,
        variant_count=len(draft.variants),
        cost=breakdown.cost,
        price=breakdown.price,
        profit=breakdown.profit,
        options=[o.model_dump() for o in build_options(draft.dimensions, draft.selection)],
        variants=[v.model_dump(mode="json") for v in draft.variants],
    )


# ===== COMPLIANCE =====

@router.post("/compliance/validate", response_model=ValidationReport)
async def validate_compliance(request: ComplianceRequest, x_admin_api_key: Optional[str] = Header(None)):
    """Run the full compliance checklist for a draft as the calling actor."""
    actor = verify_admin_key(x_admin_api_key)
    report = validate_draft(request.draft, actor)
    logger.info(f"Admin compliance check for draft {request.draft.draft_id} (owner={actor.is_owner})")
    return report
