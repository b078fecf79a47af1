from __future__ import annotations

"""
FastAPI application for the storefront related-products service.

- Serves the catalog snapshot loaded at startup
- Related items are ranked per request from scratch; nothing is cached
  between requests except the catalog itself
- Handlers are plain ``def`` so FastAPI runs them on its threadpool
"""

from typing import List, Optional, Sequence

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .catalog_filter import brand_options, category_options, filter_catalog
from .config import (
    RELATED_DEFAULT_LIMIT,
    RELATED_MAX_LIMIT,
    BusinessProfile,
    BusinessStats,
    CatalogItem,
    CatalogResponse,
    HealthResponse,
    InquirySubmission,
    ProfileCompletionResponse,
    RelatedItemsResponse,
    ScoredItemsResponse,
    StatsRequest,
)
from .constants import ALL_CATEGORIES
from .mapping import map_items_to_response, map_scored_to_response
from .pipeline_types import InvalidArgument
from .profile import missing_profile_fields, profile_completion
from .related import find_related, rank_related
from .stats import compute_business_stats
from ._singletons import get_catalog_items


# -----------------------
# FastAPI app + startup
# -----------------------

app = FastAPI(title="storefront-related")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_catalog: Optional[Sequence[CatalogItem]] = None


@app.on_event("startup")
def startup_event() -> None:
    global _catalog
    logger.info("Loading catalog snapshot...")
    try:
        _catalog = get_catalog_items()
    except FileNotFoundError as e:
        _catalog = None
        logger.warning("Catalog unavailable, catalog endpoints will return 503: {}", e)
        return
    logger.info("Loaded catalog with {} items", len(_catalog))


def _require_catalog() -> Sequence[CatalogItem]:
    if _catalog is None:
        raise HTTPException(status_code=503, detail="Catalog not loaded")
    return _catalog


def _get_item(catalog: Sequence[CatalogItem], item_id: str) -> CatalogItem:
    for item in catalog:
        if item.id == item_id:
            return item
    raise HTTPException(status_code=404, detail=f"Item {item_id!r} not found")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.get("/catalog", response_model=CatalogResponse)
def catalog(
    search: str = "",
    category: str = ALL_CATEGORIES,
    brand: Optional[str] = None,
) -> CatalogResponse:
    items = _require_catalog()
    active = [i for i in items if i.is_active]
    return CatalogResponse(
        items=filter_catalog(items, search=search, category=category, brand=brand),
        categories=category_options(active),
        brands=brand_options(active),
    )


@app.get("/items/{item_id}/related", response_model=RelatedItemsResponse)
def related(
    item_id: str,
    limit: int = Query(RELATED_DEFAULT_LIMIT, ge=1, le=RELATED_MAX_LIMIT),
) -> RelatedItemsResponse:
    items = _require_catalog()
    focal = _get_item(items, item_id)
    try:
        found: List[CatalogItem] = find_related(focal, items, limit)
    except InvalidArgument as e:
        raise HTTPException(status_code=422, detail=str(e))
    return map_items_to_response(focal.id, found)


@app.get("/items/{item_id}/related/explain", response_model=ScoredItemsResponse)
def related_explain(
    item_id: str,
    limit: int = Query(RELATED_DEFAULT_LIMIT, ge=1, le=RELATED_MAX_LIMIT),
) -> ScoredItemsResponse:
    items = _require_catalog()
    focal = _get_item(items, item_id)
    try:
        scored = rank_related(focal, items, limit)
    except InvalidArgument as e:
        raise HTTPException(status_code=422, detail=str(e))
    return map_scored_to_response(focal, scored)


@app.post("/profile/completion", response_model=ProfileCompletionResponse)
def completion(profile: BusinessProfile) -> ProfileCompletionResponse:
    return ProfileCompletionResponse(
        percent=profile_completion(profile),
        missing_fields=missing_profile_fields(profile),
    )


@app.post("/stats", response_model=BusinessStats)
def stats(req: StatsRequest) -> BusinessStats:
    return compute_business_stats(req.products, req.inquiries)


@app.post("/inquiries/validate", response_model=InquirySubmission)
def validate_inquiry(submission: InquirySubmission) -> InquirySubmission:
    """
    Check a storefront inquiry form and return it trimmed and normalized.
    Invalid forms are rejected with 422, one error per failing field.
    """
    logger.debug("Inquiry for business {} product {} passed validation",
                 submission.business_id, submission.product_id)
    return submission
