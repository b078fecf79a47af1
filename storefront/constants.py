from __future__ import annotations

"""Keyword vocabulary used by the related-item heuristics.

Kept out of the scoring functions so the list can be tuned and tested on
its own. Order matters only for logging: the first hit is the one reported.
"""

# Words that mark a product as a component or spare part of something else.
COMPONENT_KEYWORDS = (
    "spare",
    "part",
    "component",
    "accessory",
    "kit",
    "module",
    "unit",
    "assembly",
    "replacement",
)

# Values of a raw isActive/status column that mean "hidden from the storefront".
INACTIVE_MARKERS = {
    "no",
    "n",
    "false",
    "0",
    "inactive",
    "disabled",
    "archived",
    "hidden",
}

ACTIVE_MARKERS = {
    "yes",
    "y",
    "true",
    "1",
    "active",
    "enabled",
    "published",
    "visible",
}

ALL_CATEGORIES = "all"
