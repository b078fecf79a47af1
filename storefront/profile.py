"""Profile completion shown on the business dashboard."""

from __future__ import annotations

from typing import List

from .config import PROFILE_COMPLETION_CAP, PROFILE_FIELD_WEIGHT, BusinessProfile

# Order is the order missing fields are reported in. Brands are not part of
# the completion score.
PROFILE_FIELDS = (
    "name",
    "description",
    "logo",
    "address",
    "phone",
    "email",
    "website",
    "hero_slides",
    "additional_content",
)

# present counts as filled, even when empty
PRESENCE_ONLY_FIELDS = frozenset({"email"})


def _is_filled(field: str, value) -> bool:
    if value is None:
        return False
    if field in PRESENCE_ONLY_FIELDS:
        return True
    if isinstance(value, str):
        return bool(value.strip())
    return len(value) > 0


def missing_profile_fields(profile: BusinessProfile) -> List[str]:
    return [f for f in PROFILE_FIELDS if not _is_filled(f, getattr(profile, f))]


def profile_completion(profile: BusinessProfile) -> int:
    """
    Percentage shown in the "Profile Completion" card.

    Every filled field adds PROFILE_FIELD_WEIGHT points; the total is capped
    at PROFILE_COMPLETION_CAP.
    """
    filled = len(PROFILE_FIELDS) - len(missing_profile_fields(profile))
    return min(filled * PROFILE_FIELD_WEIGHT, PROFILE_COMPLETION_CAP)
