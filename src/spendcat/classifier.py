"""Summary: Keyword rule engine for category suggestions.

Importance: Provides deterministic, fast categorization without any training.
Alternatives: Use a supervised ML classifier only.
"""

from __future__ import annotations

from dataclasses import dataclass

from spendcat.lexicon import Lexicon
from spendcat.models import RuleResult

EXACT_SCORE = 1.0
DEFAULT_FUZZY_SCORE = 0.85
SHORT_KEYWORD_LENGTH = 6


@dataclass(frozen=True)
class RuleBasedClassifier:
    """Summary: Matches tokens against the static lexicon.

    Importance: Exact hits anywhere in the lexicon beat fuzzy hits anywhere.
    Alternatives: Score every category and pick the best overlap.
    """

    lexicon: Lexicon
    fuzzy_score: float = DEFAULT_FUZZY_SCORE

    def match(self, tokens: list[str]) -> RuleResult:
        """Summary: Return the first exact match, else the first fuzzy match.

        Importance: Keeps rule output stable for a given lexicon order.
        Alternatives: Interleave exact and fuzzy checks per category.
        """

        for entry in self.lexicon.entries:
            for keyword in entry.keywords:
                for token in tokens:
                    if token == keyword:
                        return RuleResult(
                            category=entry.category,
                            score=EXACT_SCORE,
                            trace=[f"exact: {token} -> {entry.category}"],
                        )
        for entry in self.lexicon.entries:
            for keyword in entry.keywords:
                limit = fuzzy_limit(keyword)
                for token in tokens:
                    if abs(len(token) - len(keyword)) > limit:
                        continue
                    if edit_distance(token, keyword) <= limit:
                        return RuleResult(
                            category=entry.category,
                            score=self.fuzzy_score,
                            trace=[f"fuzzy: {token}~{keyword} -> {entry.category}"],
                        )
        return RuleResult(category=None, score=0.0, trace=[])


def fuzzy_limit(keyword: str) -> int:
    """Summary: Allowed edit distance for a keyword."""

    return 1 if len(keyword) <= SHORT_KEYWORD_LENGTH else 2


def edit_distance(left: str, right: str) -> int:
    """Summary: Levenshtein distance with unit insert, delete and substitute costs.

    Importance: Tolerates typos in merchant names.
    Alternatives: Use a fuzzy matching library.
    """

    if left == right:
        return 0
    if not left:
        return len(right)
    if not right:
        return len(left)
    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        current = [i]
        for j, right_char in enumerate(right, start=1):
            cost = 0 if left_char == right_char else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]
