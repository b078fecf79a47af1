from __future__ import annotations

"""
Related-products ranking for the storefront product view.

Given the product a visitor is looking at (the focal item) and the rest of
the business catalog, :func:`find_related` returns a short list of products
that plausibly belong with it: same category or brand, a name that builds on
the focal name, or something that reads like a spare part or accessory.

The ranking is a pure function of its inputs. It is re-run from scratch
whenever the focal item changes and never mutates the catalog it is given.
"""

from typing import List, Sequence

from loguru import logger

from .config import RELATED_DEFAULT_LIMIT, RELATED_POOL_CAP, CatalogItem
from .pipeline_types import InvalidArgument, ScoredCandidate
from .scoring import score_candidate


def _validate(focal: CatalogItem | None, limit: int) -> None:
    if focal is None:
        raise InvalidArgument("focal item is required")
    if not (focal.name or "").strip():
        raise InvalidArgument(f"focal item {focal.id!r} has an empty name")
    # bool is an int subclass; True is not a meaningful limit
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgument(f"limit must be an integer, got {limit!r}")
    if limit <= 0:
        raise InvalidArgument(f"limit must be positive, got {limit}")


def _eligible(focal: CatalogItem, pool: Sequence[CatalogItem]) -> List[CatalogItem]:
    """Drop the focal item itself and anything hidden from the storefront."""
    eligible = [c for c in pool if c.id != focal.id and c.is_active]
    if RELATED_POOL_CAP > 0 and len(eligible) > RELATED_POOL_CAP:
        logger.warning(
            "Pool of {} items exceeds RELATED_POOL_CAP={}; truncating.",
            len(eligible),
            RELATED_POOL_CAP,
        )
        eligible = eligible[:RELATED_POOL_CAP]
    return eligible


def rank_related(
    focal: CatalogItem,
    pool: Sequence[CatalogItem],
    limit: int = RELATED_DEFAULT_LIMIT,
) -> List[ScoredCandidate]:
    """
    Score every eligible candidate against ``focal`` and return the best
    ``limit`` of them with their scores.

    Candidates scoring zero or less are dropped. Ordering is by score,
    descending; equal scores keep their order from ``pool``.

    Raises
    ------
    InvalidArgument
        If ``focal`` is missing or unnamed, or ``limit`` is not a positive int.
    """
    _validate(focal, limit)

    candidates = _eligible(focal, pool)
    scored = [ScoredCandidate(item=c, score=score_candidate(focal, c)) for c in candidates]
    scored = [s for s in scored if s.score > 0]

    # list.sort is stable, so ties stay in pool order
    scored.sort(key=lambda s: s.score, reverse=True)

    logger.debug(
        "Related for {}: {} eligible, {} positive, returning {}",
        focal.id,
        len(candidates),
        len(scored),
        min(limit, len(scored)),
    )
    return scored[:limit]


def find_related(
    focal: CatalogItem,
    pool: Sequence[CatalogItem],
    limit: int = RELATED_DEFAULT_LIMIT,
) -> List[CatalogItem]:
    """Items from ``pool`` related to ``focal``, most relevant first."""
    return [s.item for s in rank_related(focal, pool, limit)]
