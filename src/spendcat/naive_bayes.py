"""Summary: Online multinomial naive-Bayes predictor and trainer.

Importance: Learns user-specific categories from confirmed corrections.
Alternatives: Retrain a scikit-learn pipeline in batch from the audit table.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime

from spendcat.models import (
    REASON_ALL_TOKENS_UNSEEN,
    REASON_EMPTY_INPUT,
    REASON_LOW_CONFIDENCE,
    REASON_UNTRAINED,
    NbResult,
    TrainingExample,
)
from spendcat.storage.sqlite_store import SqliteStore
from spendcat.tokenizer import tokenize

logger = logging.getLogger(__name__)

DEFAULT_MIN_CONFIDENCE = 0.55


@dataclass(frozen=True)
class NaiveBayesPredictor:
    """Summary: Scores categories from stored word counts.

    Importance: Token presence, not repetition, drives the score.
    Alternatives: Weight each token's log-likelihood by its frequency in the text.
    """

    store: SqliteStore
    min_confidence: float = DEFAULT_MIN_CONFIDENCE

    def predict(self, text: str) -> NbResult:
        """Summary: Predict a category for free text.

        Importance: Abstains with a reason code instead of guessing.
        Alternatives: Always return the argmax category.
        """

        tokens = tokenize(text)
        if not tokens:
            return NbResult(
                category=None,
                probability=0.0,
                reason=REASON_EMPTY_INPUT,
                trace=["no usable tokens in text"],
            )

        totals = self.store.list_category_totals()
        vocab_size = self.store.get_vocab_size() or 1
        total_docs = sum(row.doc_count for row in totals)
        if total_docs == 0:
            return NbResult(
                category=None,
                probability=0.0,
                reason=REASON_UNTRAINED,
                trace=["model has no training data"],
            )

        unique_tokens = list(dict.fromkeys(tokens))
        counts: dict[str, dict[str, int]] = defaultdict(dict)
        for row in self.store.lookup_words(unique_tokens):
            if row.count > 0:
                counts[row.word][row.category] = row.count
        seen_tokens = [token for token in unique_tokens if counts.get(token)]
        if not seen_tokens:
            return NbResult(
                category=None,
                probability=0.0,
                reason=REASON_ALL_TOKENS_UNSEEN,
                trace=["all tokens are unseen by the model"],
            )

        scores: dict[str, float] = {}
        for row in totals:
            score = math.log((row.doc_count or 1) / total_docs)
            denominator = row.total_words + vocab_size
            for token in seen_tokens:
                count = counts[token].get(row.category, 0)
                score += math.log((count + 1) / denominator)
            scores[row.category] = score

        distribution = softmax(scores)
        best_category = None
        best_probability = -1.0
        for category, probability in distribution.items():
            if probability > best_probability:
                best_category = category
                best_probability = probability

        if best_probability < self.min_confidence:
            return NbResult(
                category=None,
                probability=best_probability,
                reason=REASON_LOW_CONFIDENCE,
                trace=[f"nb best {best_category} p={best_probability:.3f} below {self.min_confidence}"],
                distribution=distribution,
            )

        prior = next(row for row in totals if row.category == best_category)
        trace = [f"nb prior {best_category}: {prior.doc_count or 1}/{total_docs}"]
        for token in seen_tokens:
            found = ", ".join(
                f"{category}={count}" for category, count in sorted(counts[token].items())
            )
            trace.append(f"nb token {token}: {found}")
        return NbResult(
            category=best_category,
            probability=best_probability,
            trace=trace,
            distribution=distribution,
        )


def softmax(scores: dict[str, float]) -> dict[str, float]:
    """Summary: Convert log scores to probabilities, preserving key order."""

    if not scores:
        return {}
    peak = max(scores.values())
    weights = {category: math.exp(score - peak) for category, score in scores.items()}
    total = sum(weights.values())
    return {category: weight / total for category, weight in weights.items()}


@dataclass(frozen=True)
class NaiveBayesTrainer:
    """Summary: Applies confirmed labels to the stored counters.

    Importance: Pure online learning; counters only grow.
    Alternatives: Periodically rebuild counters from the audit table.
    """

    store: SqliteStore

    def train(
        self, transaction_id: str, text: str, category: str, weight: object = 1
    ) -> str | None:
        """Summary: Record one labeling event and update counters.

        Importance: Every call counts, so relabeling a transaction adds another document.
        Alternatives: Deduplicate by transaction id.
        """

        tokens = tokenize(text)
        if not tokens:
            logger.info("Skipped training for transaction %s: no usable tokens.", transaction_id)
            return None

        multiplier = coerce_weight(weight)
        token_counts = {token: count * multiplier for token, count in Counter(tokens).items()}
        new_words = set(token_counts) - self.store.known_words(token_counts)

        example = TrainingExample(
            id=str(uuid.uuid4()),
            transaction_id=transaction_id,
            text=text,
            category=category,
            created_at=datetime.utcnow(),
        )
        token_mass = sum(token_counts.values())
        self.store.record_training(example, token_counts, token_mass, len(new_words))

        logger.info(
            "Trained category %s on %s tokens (weighted=%s, new words=%s) for transaction %s.",
            category,
            len(tokens),
            token_mass,
            len(new_words),
            transaction_id,
        )
        return example.id


def coerce_weight(weight: object) -> int:
    """Summary: Coerce any weight to an integer of at least one.

    Importance: Malformed weights are clamped rather than rejected.
    Alternatives: Raise ValueError for invalid weights.
    """

    try:
        value = float(weight)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(value):
        return 1
    return max(1, math.floor(value + 0.5))
