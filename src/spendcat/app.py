"""Summary: Application factory wiring core services.

Importance: Centralizes dependency creation for the CLI and API layers.
Alternatives: Instantiate services manually in each entrypoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from spendcat.classifier import RuleBasedClassifier
from spendcat.config import AppConfig
from spendcat.lexicon import Lexicon, default_lexicon, load_lexicon
from spendcat.naive_bayes import NaiveBayesPredictor, NaiveBayesTrainer
from spendcat.services import CategorizationService, HybridCombiner, ModelService
from spendcat.storage.sqlite_store import SqliteStore


@dataclass(frozen=True)
class AppServices:
    """Summary: Bundle of core services for SpendCat.

    Importance: Simplifies passing dependencies to UI or API layers.
    Alternatives: Use a dependency injection container.
    """

    categorization: CategorizationService
    model: ModelService
    lexicon: Lexicon
    store: SqliteStore


def build_lexicon_from_config(config: AppConfig) -> Lexicon:
    """Summary: Load the configured lexicon or fall back to the built-in one."""

    if config.lexicon_path:
        return load_lexicon(Path(config.lexicon_path))
    return default_lexicon()


def build_services(config: AppConfig) -> AppServices:
    """Summary: Build core services from configuration.

    Importance: Provides a single construction path for the application.
    Alternatives: Instantiate services directly within the CLI entrypoint.
    """

    store = SqliteStore(config.db_path)
    store.initialize()
    lexicon = build_lexicon_from_config(config)
    categorization = CategorizationService(
        classifier=RuleBasedClassifier(lexicon=lexicon, fuzzy_score=config.fuzzy_score),
        predictor=NaiveBayesPredictor(store=store, min_confidence=config.min_confidence),
        trainer=NaiveBayesTrainer(store=store),
        combiner=HybridCombiner(
            nb_threshold=config.nb_threshold,
            override_threshold=config.override_threshold,
        ),
    )
    return AppServices(
        categorization=categorization,
        model=ModelService(store=store),
        lexicon=lexicon,
        store=store,
    )
