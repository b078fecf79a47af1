from __future__ import annotations

"""
Storefront browsing: the search box, category dropdown and brand chips on a
business's public product page.
"""

from typing import Iterable, List, Optional, Sequence

from .config import MAX_SEARCH_CHARS, CatalogItem
from .constants import ALL_CATEGORIES
from .normalize import clamp_text_length


def filter_catalog(
    items: Sequence[CatalogItem],
    search: str = "",
    category: str = ALL_CATEGORIES,
    brand: Optional[str] = None,
    active_only: bool = True,
) -> List[CatalogItem]:
    """
    Items matching every active filter, in catalog order.

    - ``search``: case-insensitive substring of the product name; blank
      matches everything.
    - ``category``: ``"all"`` or an exact category id.
    - ``brand``: None or an exact brand name; blank means no brand filter.
    """
    needle = clamp_text_length(search or "", MAX_SEARCH_CHARS).strip().lower()
    if brand is not None and not brand.strip():
        brand = None

    out: List[CatalogItem] = []
    for item in items:
        if active_only and not item.is_active:
            continue
        if needle and needle not in item.name.lower():
            continue
        if category != ALL_CATEGORIES and item.category_id != category:
            continue
        if brand is not None and item.brand_name != brand:
            continue
        out.append(item)
    return out


def _distinct(values: Iterable[Optional[str]]) -> List[str]:
    seen = set()
    out: List[str] = []
    for v in values:
        if v is None or v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


def category_options(items: Sequence[CatalogItem]) -> List[str]:
    return _distinct(item.category_id for item in items)


def brand_options(items: Sequence[CatalogItem]) -> List[str]:
    return _distinct(item.brand_name for item in items)
