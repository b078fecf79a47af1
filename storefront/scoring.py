"""
Relevance rules for the related-products panel.

Every rule is a pure function ``(focal, candidate) -> int`` returning the
points that one signal contributes. A candidate's score is the plain sum
over :data:`SCORING_RULES`; rules never look at each other's output, so
each can be tested in isolation.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence, Tuple

from loguru import logger

from .config import (
    BRAND_MATCH_POINTS,
    CATEGORY_MATCH_POINTS,
    COMPONENT_KEYWORD_POINTS,
    MIN_SIGNIFICANT_TOKEN_LEN,
    NAME_SUBSTRING_POINTS,
    SHARED_WORD_POINTS,
    CatalogItem,
)
from .constants import COMPONENT_KEYWORDS
from .normalize import lower_tokens, significant_tokens

RuleFn = Callable[[CatalogItem, CatalogItem], int]


def category_match(focal: CatalogItem, candidate: CatalogItem) -> int:
    if focal.category_id is None or candidate.category_id is None:
        return 0
    return CATEGORY_MATCH_POINTS if focal.category_id == candidate.category_id else 0


def brand_match(focal: CatalogItem, candidate: CatalogItem) -> int:
    # exact, case-sensitive
    if focal.brand_name is None or candidate.brand_name is None:
        return 0
    return BRAND_MATCH_POINTS if focal.brand_name == candidate.brand_name else 0


def name_substring(focal: CatalogItem, candidate: CatalogItem) -> int:
    """
    Points when a meaningful word of the focal name shows up anywhere inside
    the candidate's name ("drill" in "drill-bit set"). Awarded once: the
    first matching word ends the check.
    """
    haystack = candidate.name.lower()
    for tok in lower_tokens(focal.name):
        if len(tok) >= MIN_SIGNIFICANT_TOKEN_LEN and tok in haystack:
            return NAME_SUBSTRING_POINTS
    return 0


def component_keyword(focal: CatalogItem, candidate: CatalogItem) -> int:
    """Points when the candidate reads like a spare part or accessory."""
    text = f"{candidate.name} {candidate.description or ''}".lower()
    for keyword in COMPONENT_KEYWORDS:
        if keyword in text:
            return COMPONENT_KEYWORD_POINTS
    return 0


def shared_words(focal: CatalogItem, candidate: CatalogItem) -> int:
    focal_words = set(significant_tokens(focal.name))
    candidate_words = set(lower_tokens(candidate.name))
    return SHARED_WORD_POINTS * len(focal_words & candidate_words)


SCORING_RULES: Tuple[Tuple[str, RuleFn], ...] = (
    ("category_match", category_match),
    ("brand_match", brand_match),
    ("name_substring", name_substring),
    ("component_keyword", component_keyword),
    ("shared_words", shared_words),
)


def score_breakdown(
    focal: CatalogItem,
    candidate: CatalogItem,
    rules: Sequence[Tuple[str, RuleFn]] = SCORING_RULES,
) -> Dict[str, int]:
    """Points per rule name, in rule order."""
    return {name: rule(focal, candidate) for name, rule in rules}


def score_candidate(
    focal: CatalogItem,
    candidate: CatalogItem,
    rules: Sequence[Tuple[str, RuleFn]] = SCORING_RULES,
) -> int:
    total = sum(rule(focal, candidate) for _, rule in rules)
    logger.trace("score {} -> {} = {}", focal.id, candidate.id, total)
    return total
