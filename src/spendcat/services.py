"""Summary: Core application services for SpendCat.

Importance: Exposes the predict and train entry points the finance app calls.
Alternatives: Let callers wire the tokenizer, engines and store themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from spendcat.classifier import RuleBasedClassifier
from spendcat.models import (
    SOURCE_NB,
    SOURCE_NONE,
    SOURCE_RULE,
    HybridResult,
    NbResult,
    RuleResult,
    Suggestion,
)
from spendcat.naive_bayes import NaiveBayesPredictor, NaiveBayesTrainer
from spendcat.storage.sqlite_store import SqliteStore, StoredTrainingExample
from spendcat.tokenizer import combine_text, tokenize


logger = logging.getLogger(__name__)

DEFAULT_NB_THRESHOLD = 0.6
DEFAULT_OVERRIDE_THRESHOLD = 0.85


@dataclass(frozen=True)
class HybridCombiner:
    """Summary: Reconciles rule and naive-Bayes results.

    Importance: Rules win unless the model is very sure of a different category.
    Alternatives: Average the two engines' confidences.
    """

    nb_threshold: float = DEFAULT_NB_THRESHOLD
    override_threshold: float = DEFAULT_OVERRIDE_THRESHOLD

    def combine(self, text: str, rule: RuleResult, nb: NbResult) -> HybridResult:
        """Summary: Pick the final category and explain the choice.

        Importance: Every branch leaves a justification for the UI.
        Alternatives: Return only the winning label.
        """

        if not text or not text.strip():
            return HybridResult(
                category=None, confidence=0.0, source=SOURCE_NONE, reasons=["no text provided"]
            )

        traces = rule.trace + nb.trace
        if rule.category is not None:
            if (
                nb.category is not None
                and nb.category != rule.category
                and nb.probability >= self.override_threshold
            ):
                return HybridResult(
                    category=nb.category,
                    confidence=nb.probability,
                    source=SOURCE_NB,
                    reasons=[
                        f"nb override of rule {rule.category} "
                        f"(p={nb.probability:.3f} >= {self.override_threshold})"
                    ]
                    + traces,
                )
            return HybridResult(
                category=rule.category,
                confidence=rule.score,
                source=SOURCE_RULE,
                reasons=[f"rule match used (nb p={nb.probability:.3f})"] + traces,
            )

        if nb.category is not None and nb.probability >= self.nb_threshold:
            return HybridResult(
                category=nb.category,
                confidence=nb.probability,
                source=SOURCE_NB,
                reasons=[f"nb used, no rule match (p={nb.probability:.3f})"] + traces,
            )
        return HybridResult(
            category=None,
            confidence=max(rule.score, nb.probability),
            source=SOURCE_NONE,
            reasons=["low confidence from both engines"] + traces,
        )


@dataclass(frozen=True)
class CategorizationService:
    """Summary: Predicts and learns transaction categories.

    Importance: The only surface the rest of the application needs.
    Alternatives: Expose the engines directly.
    """

    classifier: RuleBasedClassifier
    predictor: NaiveBayesPredictor
    trainer: NaiveBayesTrainer
    combiner: HybridCombiner

    def classify(self, note: str | None = None, merchant: str | None = None) -> HybridResult:
        """Summary: Run both engines and combine them.

        Importance: Keeps the full decision trail for debugging and the API.
        Alternatives: Return only the UI suggestion.
        """

        text = combine_text(note, merchant)
        if not text:
            return self.combiner.combine(text, RuleResult(None, 0.0), NbResult(None, 0.0))
        rule = self.classifier.match(tokenize(text))
        nb = self.predictor.predict(text)
        return self.combiner.combine(text, rule, nb)

    def predict(self, note: str | None = None, merchant: str | None = None) -> Suggestion | None:
        """Summary: Suggest a category for an uncategorized transaction.

        Importance: Returns None when neither engine is confident.
        Alternatives: Return a suggestion with an empty category.
        """

        result = self.classify(note, merchant)
        if result.category is None:
            return None
        return Suggestion(
            category=result.category,
            confidence=result.confidence,
            explanation=result.explanation,
        )

    def train(
        self,
        transaction_id: str,
        category: str,
        note: str | None = None,
        merchant: str | None = None,
        weight: object = 1,
    ) -> str | None:
        """Summary: Learn from a category the user set or edited.

        Importance: Feeds user corrections back into the model immediately.
        Alternatives: Queue corrections for a nightly batch job.
        """

        if not category or not category.strip():
            raise ValueError("Category is required for training")
        text = combine_text(note, merchant)
        if not text:
            return None
        return self.trainer.train(transaction_id, text, category.strip(), weight)


@dataclass(frozen=True)
class ModelService:
    """Summary: Inspects and resets the learned model.

    Importance: Supports debugging and the privacy reset feature.
    Alternatives: Query the database directly.
    """

    store: SqliteStore

    def snapshot(self) -> dict[str, Any]:
        """Summary: Summarize the learned counters.

        Importance: Shows how much the model has learned at a glance.
        Alternatives: Log counters during training only.
        """

        totals = self.store.list_category_totals()
        return {
            "vocab_size": self.store.get_vocab_size(),
            "categories": len(totals),
            "documents": sum(row.doc_count for row in totals),
            "training_examples": self.store.count_training_examples(),
            "category_totals": [
                {
                    "category": row.category,
                    "total_words": row.total_words,
                    "doc_count": row.doc_count,
                }
                for row in totals
            ],
        }

    def list_training_examples(self, limit: int = 20) -> list[StoredTrainingExample]:
        return self.store.list_training_examples(limit)

    def reset_model(self) -> None:
        """Summary: Forget everything learned from user labels."""

        self.store.reset()
        logger.info("Reset naive-Bayes model.")
