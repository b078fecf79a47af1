"""Business dashboard counters: products, inquiries by status, recent inquiries."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from loguru import logger

from .config import (
    RECENT_INQUIRY_DAYS,
    RECENT_INQUIRY_LIMIT,
    BusinessStats,
    CatalogItem,
    Inquiry,
    InquiryStatus,
)


def _as_utc(dt: datetime) -> datetime:
    # naive timestamps from the store are UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def compute_business_stats(
    products: Sequence[CatalogItem],
    inquiries: Sequence[Inquiry],
    now: Optional[datetime] = None,
    recent_days: int = RECENT_INQUIRY_DAYS,
    recent_limit: int = RECENT_INQUIRY_LIMIT,
) -> BusinessStats:
    if recent_days < 0:
        raise ValueError(f"recent_days must be >= 0, got {recent_days}")
    if recent_limit < 0:
        raise ValueError(f"recent_limit must be >= 0, got {recent_limit}")

    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    cutoff = now - timedelta(days=recent_days)

    by_status = Counter(inq.status for inq in inquiries)
    recent = [inq for inq in inquiries if _as_utc(inq.created_at) >= cutoff]
    # stable sort: equal timestamps keep input order
    latest = sorted(recent, key=lambda inq: _as_utc(inq.created_at), reverse=True)

    stats = BusinessStats(
        total_products=len(products),
        active_products=sum(1 for p in products if p.is_active),
        total_inquiries=len(inquiries),
        new_inquiries=by_status[InquiryStatus.NEW],
        read_inquiries=by_status[InquiryStatus.READ],
        replied_inquiries=by_status[InquiryStatus.REPLIED],
        closed_inquiries=by_status[InquiryStatus.CLOSED],
        recent_inquiries=len(recent),
        latest_inquiries=latest[:recent_limit],
    )
    logger.debug("Business stats: {} products, {} inquiries", stats.total_products, stats.total_inquiries)
    return stats
