"""Summary: Tests for text tokenization.

Importance: Both engines depend on identical, bounded token streams.
Alternatives: Test tokenization indirectly through predictions.
"""

from __future__ import annotations

from spendcat.tokenizer import MAX_TOKENS, combine_text, tokenize


def test_tokenize_strips_punctuation_and_keeps_order() -> None:
    """Summary: Verify punctuation is removed and order preserved.

    Importance: Rule matching walks tokens in their original order.
    Alternatives: Sort tokens for deterministic output.
    """

    assert tokenize("Zomato Order!! 123") == ["zomato", "order", "123"]


def test_tokenize_collapses_elongated_spellings() -> None:
    """Summary: Verify runs of three or more characters shrink to two.

    Importance: Normalizes casual spellings before matching.
    Alternatives: Leave spellings untouched and rely on fuzzy matching.
    """

    assert tokenize("sooooo") == ["soo"]
    assert tokenize("soooo good") == ["soo", "good"]


def test_tokenize_drops_short_tokens_and_stopwords() -> None:
    """Summary: Verify short tokens and stopwords are removed.

    Importance: Keeps uninformative words out of the model.
    Alternatives: Weight stopwords down instead of dropping them.
    """

    assert tokenize("Lunch at the cafe with friends") == ["lunch", "cafe", "friends"]
    assert tokenize("ab cd efg") == ["efg"]
    assert tokenize("zzzz") == []


def test_tokenize_truncates_to_first_tokens() -> None:
    """Summary: Verify only the first ten surviving tokens are kept.

    Importance: Bounds the work done per prediction.
    Alternatives: Keep all tokens regardless of length.
    """

    words = [f"word{index}" for index in range(15)]
    tokens = tokenize(" ".join(words))
    assert len(tokens) == MAX_TOKENS
    assert tokens == words[:MAX_TOKENS]


def test_tokenize_handles_empty_input() -> None:
    """Summary: Verify empty and missing text produce no tokens.

    Importance: Empty input is a normal, non-error case.
    Alternatives: Raise ValueError for empty input.
    """

    assert tokenize("") == []
    assert tokenize(None) == []
    assert tokenize("   !!! ") == []


def test_combine_text_joins_note_and_merchant() -> None:
    """Summary: Verify note and merchant are combined into one description.

    Importance: Both fields carry category signal.
    Alternatives: Use only the merchant name.
    """

    assert combine_text("dinner", "Swiggy") == "dinner Swiggy"
    assert combine_text(None, "Uber") == "Uber"
    assert combine_text(None, None) == ""
