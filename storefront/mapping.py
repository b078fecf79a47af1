from __future__ import annotations
"""
Mapping utilities between catalog snapshot rows and the pydantic models.

Centralises how snapshot rows become CatalogItem instances and how ranked
results become API responses, so the API and the CLI agree on both.
"""

from typing import List, Sequence

import pandas as pd
from loguru import logger
from pydantic import ValidationError

from .config import CatalogItem, RelatedItemsResponse, ScoredItem, ScoredItemsResponse
from .pipeline_types import ScoredCandidate
from .scoring import score_breakdown


def _text_or_none(val) -> str | None:
    if val is None:
        return None
    try:
        if pd.isna(val):
            return None
    except (TypeError, ValueError):
        pass
    s = str(val).strip()
    return s or None


def _build_catalog_item(row: pd.Series) -> CatalogItem:
    is_active = row.get("is_active", True)
    return CatalogItem(
        id=str(row.get("id", "") or "").strip(),
        name=str(row.get("name", "") or "").strip(),
        description=_text_or_none(row.get("description")),
        category_id=_text_or_none(row.get("category_id")),
        brand_name=_text_or_none(row.get("brand_name")),
        is_active=True if _text_or_none(is_active) is None else bool(is_active),
    )


def map_rows_to_items(catalog_df: pd.DataFrame) -> List[CatalogItem]:
    """
    Convert a normalized catalog frame into CatalogItem models, keeping row
    order. Rows that fail validation are logged and skipped.
    """
    if catalog_df is None:
        raise ValueError("catalog_df must be provided to map_rows_to_items")

    items: List[CatalogItem] = []
    for _, row in catalog_df.iterrows():
        try:
            items.append(_build_catalog_item(row))
        except ValidationError as e:
            logger.warning("Skipping catalog row {}: {}", row.get("id"), e)

    logger.info("Mapped {} catalog rows into items", len(items))
    return items


def map_items_to_response(focal_id: str, items: Sequence[CatalogItem]) -> RelatedItemsResponse:
    return RelatedItemsResponse(item_id=focal_id, related_items=list(items))


def map_scored_to_response(
    focal: CatalogItem,
    scored: Sequence[ScoredCandidate],
) -> ScoredItemsResponse:
    """
    Attach the per-rule breakdown to each scored candidate for the explain
    endpoint.
    """
    out = [
        ScoredItem(
            item=s.item,
            score=s.score,
            breakdown=score_breakdown(focal, s.item),
        )
        for s in scored
    ]
    return ScoredItemsResponse(item_id=focal.id, scored_items=out)
