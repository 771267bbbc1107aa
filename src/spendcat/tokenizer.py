"""Summary: Text normalization for transaction descriptions.

Importance: Gives the rule engine and naive-Bayes model the same token stream.
Alternatives: Use a stemming tokenizer from an NLP library.
"""

from __future__ import annotations

import re

MAX_TOKENS = 10
MIN_TOKEN_LENGTH = 3

STOPWORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "in", "on", "at", "to", "for", "from",
        "with", "of", "by", "is", "was", "were", "be", "been", "are",
        "has", "have", "had", "will", "into",
    }
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_REPEATED_CHAR = re.compile(r"(.)\1{2,}")


def tokenize(text: str | None) -> list[str]:
    """Summary: Split text into at most ten normalized tokens.

    Importance: Bounds the work done per prediction and keeps spellings comparable.
    Alternatives: Keep every token and let the model weigh them.
    """

    if not text:
        return []
    cleaned = _NON_ALNUM.sub(" ", text.lower())
    tokens: list[str] = []
    for raw in cleaned.split():
        token = _REPEATED_CHAR.sub(r"\1\1", raw)
        if len(token) < MIN_TOKEN_LENGTH or token in STOPWORDS:
            continue
        tokens.append(token)
        if len(tokens) == MAX_TOKENS:
            break
    return tokens


def combine_text(note: str | None = None, merchant: str | None = None) -> str:
    """Summary: Join a user note and merchant name into one description."""

    return " ".join(part for part in (note, merchant) if part).strip()
