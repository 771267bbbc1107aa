"""Summary: Domain model dataclasses for SpendCat.

Importance: Defines the result and record types shared by the engines, storage and services.
Alternatives: Use Pydantic models or plain dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

NO_REASON = ""
REASON_EMPTY_INPUT = "empty_input"
REASON_UNTRAINED = "untrained"
REASON_ALL_TOKENS_UNSEEN = "all_tokens_unseen"
REASON_LOW_CONFIDENCE = "low_confidence"

SOURCE_RULE = "rule"
SOURCE_NB = "nb"
SOURCE_NONE = "none"


@dataclass(frozen=True)
class RuleResult:
    """Summary: Outcome of a lexicon lookup.

    Importance: Carries the rule score so the combiner can report it unchanged.
    Alternatives: Return only the matched category name.
    """

    category: str | None
    score: float
    trace: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NbResult:
    """Summary: Outcome of a naive-Bayes prediction.

    Importance: Distinguishes a confident label from each kind of abstention.
    Alternatives: Raise exceptions for untrained or unseen inputs.
    """

    category: str | None
    probability: float
    reason: str = NO_REASON
    trace: list[str] = field(default_factory=list)
    distribution: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class HybridResult:
    """Summary: Final decision produced by the hybrid combiner.

    Importance: Records which engine won and why, for UI explanations.
    Alternatives: Expose both engine results and let callers decide.
    """

    category: str | None
    confidence: float
    source: str
    reasons: list[str] = field(default_factory=list)

    @property
    def explanation(self) -> str:
        return "; ".join(self.reasons)


@dataclass(frozen=True)
class Suggestion:
    """Summary: UI-facing category suggestion.

    Importance: Keeps the application contract small and stable.
    Alternatives: Return the full hybrid result to the UI.
    """

    category: str | None
    confidence: float
    explanation: str


@dataclass(frozen=True)
class TrainingExample:
    """Summary: Audit record of a user-confirmed label.

    Importance: Keeps a write-once history of every labeling event.
    Alternatives: Log labels only to application logs.
    """

    id: str
    transaction_id: str
    text: str
    category: str
    created_at: datetime
