from storefront.config import MAX_INPUT_CHARS
from storefront.normalize import (
    basic_clean,
    clamp_text_length,
    lower_tokens,
    significant_tokens,
    strip_html,
)


def test_strip_html_basic():
    html = "<p>Hello <b>world</b>!</p>"
    assert strip_html(html) == "Hello world !"
    assert strip_html("plain text ") == "plain text"
    assert strip_html(None) == ""


def test_basic_clean_trims_whitespace_and_html():
    raw = "   <div>Hello   world</div>\n"
    assert basic_clean(raw) == "Hello world"


def test_basic_clean_normalises_quotes_and_keeps_case():
    assert basic_clean("Bosch ‘Pro’ – XL") == "Bosch 'Pro' - XL"


def test_lower_tokens_splits_on_any_whitespace():
    assert lower_tokens("Drill  Machine\tXL200\n") == ["drill", "machine", "xl200"]
    assert lower_tokens("") == []
    assert lower_tokens(None) == []


def test_significant_tokens_dedups_and_drops_short():
    assert significant_tokens("Kit for the Drill drill PRESS") == ["drill", "press"]


def test_clamp_text_length():
    text = "x" * (MAX_INPUT_CHARS + 100)
    assert len(clamp_text_length(text)) == MAX_INPUT_CHARS
    assert clamp_text_length("abc", 2) == "ab"
