"""Typed containers shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass

from .config import CatalogItem


class InvalidArgument(ValueError):
    """Raised when the related-item scorer is called with unusable input."""


@dataclass(frozen=True)
class ScoredCandidate:
    """A catalog candidate paired with its relevance to the focal item."""

    item: CatalogItem
    score: int
