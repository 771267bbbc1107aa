"""Summary: Static keyword lexicon for the rule engine.

Importance: Provides deterministic categorization before any training data exists.
Alternatives: Store keywords per category in the database and let users edit them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from spendcat.tokenizer import tokenize


@dataclass(frozen=True)
class LexiconEntry:
    """Summary: Ordered keywords that identify one category.

    Importance: Declaration order decides which keyword wins a rule match.
    Alternatives: Use a set and accept arbitrary match order.
    """

    category: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class Lexicon:
    """Summary: Immutable mapping of category to keyword list.

    Importance: Loaded once and shared by every rule engine call.
    Alternatives: Keep a mutable module-level dictionary.
    """

    entries: tuple[LexiconEntry, ...]

    def categories(self) -> list[str]:
        return [entry.category for entry in self.entries]

    def as_dict(self) -> dict[str, list[str]]:
        return {entry.category: list(entry.keywords) for entry in self.entries}


_DEFAULT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "food": (
        "zomato", "swiggy", "dominos", "pizza", "kfc", "mcdonalds",
        "burger", "restaurant", "lunch", "dinner", "biryani",
    ),
    "transport": (
        "uber", "rapido", "metro", "petrol", "diesel", "train",
    ),
    "shopping": (
        "amazon", "flipkart", "myntra", "ajio", "meesho", "dmart",
        "bigbasket", "nykaa", "zara",
    ),
    "bills": (
        "electricity", "water", "recharge", "airtel",
        "jio", "broadband", "wifi", "dth", "bill",
    ),
    "health": (
        "pharmacy", "medical", "chemist", "hospital", "clinic",
        "medlife", "1mg", "apollo",
    ),
    "subscriptions": (
        "spotify", "netflix", "hotstar", "youtube",
        "apple", "google", "itunes",
    ),
}


def default_lexicon() -> Lexicon:
    """Summary: Return the built-in lexicon."""

    return build_lexicon(_DEFAULT_KEYWORDS)


def build_lexicon(mapping: dict[str, list[str] | tuple[str, ...]]) -> Lexicon:
    """Summary: Validate a category to keywords mapping and freeze it.

    Importance: Rejects keywords the tokenizer could never produce.
    Alternatives: Silently normalize invalid keywords.
    """

    entries: list[LexiconEntry] = []
    for category, keywords in mapping.items():
        if not category:
            raise ValueError("Lexicon category names must be non-empty")
        normalized: list[str] = []
        for keyword in keywords:
            if not isinstance(keyword, str) or tokenize(keyword) != [keyword]:
                raise ValueError(f"Invalid keyword for {category}: {keyword!r}")
            normalized.append(keyword)
        entries.append(LexiconEntry(category=category, keywords=tuple(normalized)))
    return Lexicon(entries=tuple(entries))


def load_lexicon(path: Path) -> Lexicon:
    """Summary: Load a lexicon from a JSON object of category to keyword list.

    Importance: Allows deployments to ship their own merchant vocabulary.
    Alternatives: Require code changes to add keywords.
    """

    if not path.exists():
        raise FileNotFoundError(f"Lexicon file not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Lexicon file must contain a JSON object: {path}")
    for category, keywords in payload.items():
        if not isinstance(keywords, list):
            raise ValueError(f"Keywords for {category} must be a list")
    return build_lexicon(payload)
