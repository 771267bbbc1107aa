"""Summary: Tests for lexicon construction and loading.

Importance: The lexicon is shared configuration for every rule match.
Alternatives: Trust lexicon files without validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from spendcat.lexicon import build_lexicon, default_lexicon, load_lexicon


def test_default_lexicon_declares_categories_in_order() -> None:
    """Summary: Verify the built-in lexicon keeps declaration order.

    Importance: Category order decides rule match priority.
    Alternatives: Sort categories alphabetically.
    """

    lexicon = default_lexicon()
    assert lexicon.categories()[:2] == ["food", "transport"]
    assert lexicon.as_dict()["food"][0] == "zomato"


def test_load_lexicon_from_json(tmp_path: Path) -> None:
    """Summary: Verify a lexicon file is loaded in file order.

    Importance: Deployments can ship their own keywords.
    Alternatives: Hardcode the lexicon in code only.
    """

    path = tmp_path / "lexicon.json"
    path.write_text('{"travel": ["airbnb", "irctc"], "pets": ["petco"]}', encoding="utf-8")
    lexicon = load_lexicon(path)
    assert lexicon.categories() == ["travel", "pets"]
    assert lexicon.entries[0].keywords == ("airbnb", "irctc")


def test_lexicon_rejects_untokenizable_keywords() -> None:
    """Summary: Verify keywords the tokenizer never produces are rejected.

    Importance: Such keywords would silently never match.
    Alternatives: Strip punctuation from keywords on load.
    """

    with pytest.raises(ValueError):
        build_lexicon({"shopping": ["h&m"]})
    with pytest.raises(ValueError):
        build_lexicon({"shopping": ["Zara"]})


def test_lexicon_rejects_accented_and_short_keywords() -> None:
    """Summary: Verify non-ASCII, too-short and stopword keywords are rejected.

    Importance: The tokenizer strips accents and drops tokens under three characters.
    Alternatives: Accept any alphanumeric string.
    """

    for keyword in ("café", "vi", "the", "zzzap"):
        with pytest.raises(ValueError):
            build_lexicon({"food": [keyword]})


def test_load_lexicon_errors(tmp_path: Path) -> None:
    """Summary: Verify missing and malformed lexicon files raise.

    Importance: Misconfiguration fails at startup rather than at match time.
    Alternatives: Fall back to the default lexicon.
    """

    with pytest.raises(FileNotFoundError):
        load_lexicon(tmp_path / "missing.json")
    path = tmp_path / "bad.json"
    path.write_text('{"food": "pizza"}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_lexicon(path)
