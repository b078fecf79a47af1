from datetime import datetime, timedelta, timezone

import pytest

from storefront.config import CatalogItem, Inquiry, InquiryStatus
from storefront.stats import compute_business_stats

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _inquiry(id, status, days_ago):
    return Inquiry(id=id, status=status, created_at=NOW - timedelta(days=days_ago))


def test_compute_business_stats_counts():
    products = [
        CatalogItem(id="a", name="Drill"),
        CatalogItem(id="b", name="Saw", is_active=False),
    ]
    inquiries = [
        _inquiry("1", InquiryStatus.NEW, 1),
        _inquiry("2", InquiryStatus.NEW, 45),
        _inquiry("3", InquiryStatus.REPLIED, 10),
        _inquiry("4", InquiryStatus.CLOSED, 30),
    ]

    stats = compute_business_stats(products, inquiries, now=NOW)

    assert stats.total_products == 2
    assert stats.active_products == 1
    assert stats.total_inquiries == 4
    assert stats.new_inquiries == 2
    assert stats.read_inquiries == 0
    assert stats.replied_inquiries == 1
    assert stats.closed_inquiries == 1
    # 30 days ago is still inside the window
    assert stats.recent_inquiries == 3


def test_naive_timestamps_are_utc():
    inquiry = Inquiry(id="1", createdAt=datetime(2026, 2, 28, 12, 0))
    stats = compute_business_stats([], [inquiry], now=NOW, recent_days=1)
    assert stats.recent_inquiries == 1
    assert stats.new_inquiries == 1


def test_negative_window_rejected():
    with pytest.raises(ValueError):
        compute_business_stats([], [], now=NOW, recent_days=-1)


def test_latest_inquiries_newest_first_and_capped():
    inquiries = [_inquiry(str(d), InquiryStatus.NEW, d) for d in (5, 1, 40, 3, 2, 4)]
    stats = compute_business_stats([], inquiries, now=NOW, recent_limit=3)
    assert stats.recent_inquiries == 5
    assert [i.id for i in stats.latest_inquiries] == ["1", "2", "3"]


def test_latest_inquiries_default_limit():
    inquiries = [_inquiry(str(d), InquiryStatus.READ, d) for d in range(15)]
    stats = compute_business_stats([], inquiries, now=NOW)
    assert len(stats.latest_inquiries) == 10
    assert stats.latest_inquiries[0].id == "0"


def test_negative_recent_limit_rejected():
    with pytest.raises(ValueError):
        compute_business_stats([], [], now=NOW, recent_limit=-1)
