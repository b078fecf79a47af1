from __future__ import annotations

"""
Text helpers shared by catalog building, storefront search and scoring.

Public helpers:

* lower_tokens(text) -> List[str]
    Lowercased whitespace tokens; the view of a product name the
    related-item rules match on.

* significant_tokens(text) -> List[str]
    Distinct lower tokens long enough to carry meaning.

* basic_clean(text) -> str
    Light-weight clean used when building the catalog snapshot.
"""

from typing import List
import re
import unicodedata

from bs4 import BeautifulSoup

from .config import MAX_INPUT_CHARS, MIN_SIGNIFICANT_TOKEN_LEN

# ---------------------------------------------------------------------------
# Low-level helpers
# ---------------------------------------------------------------------------


def _normalise_unicode(text: str) -> str:
    text = unicodedata.normalize("NFKC", text)
    # Replace fancy quotes / dashes with ASCII variants
    text = text.replace("\u2018", "'").replace("\u2019", "'")
    text = text.replace("\u201c", '"').replace("\u201d", '"')
    text = text.replace("\u2013", "-").replace("\u2014", "-")
    return text


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def strip_html(text: str | None) -> str:
    """Remove HTML tags, keeping the visible text separated by spaces."""
    if not text:
        return ""
    if "<" not in text:
        return text.strip()
    soup = BeautifulSoup(text, "html.parser")
    return soup.get_text(" ", strip=True)


def clamp_text_length(text: str | None, max_chars: int = MAX_INPUT_CHARS) -> str:
    if text is None:
        return ""
    return text if len(text) <= max_chars else text[:max_chars]


def basic_clean(text: str | None) -> str:
    """Light-weight clean for catalog fields.

    * strips HTML
    * normalises unicode and whitespace
    * truncates excessively long inputs

    Casing is preserved so the storefront can display the result.
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)

    text = clamp_text_length(text)
    text = strip_html(text)
    text = _normalise_unicode(text)

    text = re.sub(r"\s+", " ", text).strip()
    return text


def lower_tokens(text: str | None) -> List[str]:
    """Lowercase ``text`` and split it on runs of whitespace."""
    if not text:
        return []
    return text.lower().split()


def significant_tokens(
    text: str | None,
    min_len: int = MIN_SIGNIFICANT_TOKEN_LEN,
) -> List[str]:
    """
    Distinct lower tokens of at least ``min_len`` characters, in the order
    they first appear. Repeats within the same text collapse to one.
    """
    seen = set()
    out: List[str] = []
    for tok in lower_tokens(text):
        if len(tok) < min_len or tok in seen:
            continue
        seen.add(tok)
        out.append(tok)
    return out
