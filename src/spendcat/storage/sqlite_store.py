"""Summary: SQLite storage implementation for SpendCat.

Importance: Owns every persisted model counter and the training audit trail.
Alternatives: Use an ORM or an external database immediately.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from spendcat.models import TrainingExample

logger = logging.getLogger(__name__)

VOCAB_SIZE_KEY = "vocab_size"


@dataclass(frozen=True)
class StoredWordFrequency:
    """Summary: Count of one word under one category.

    Importance: Supplies the likelihood terms of the naive-Bayes score.
    Alternatives: Store a serialized count matrix per category.
    """

    word: str
    category: str
    count: int


@dataclass(frozen=True)
class StoredCategoryTotals:
    """Summary: Token mass and document count for a category.

    Importance: Supplies priors and smoothing denominators.
    Alternatives: Recompute totals from word counts on each prediction.
    """

    category: str
    total_words: int
    doc_count: int


@dataclass(frozen=True)
class StoredTrainingExample:
    """Summary: Training audit record as stored.

    Importance: Keeps the ISO timestamp exactly as persisted.
    Alternatives: Parse timestamps back into datetime on read.
    """

    id: str
    transaction_id: str
    text: str
    category: str
    created_at: str


class SqliteStore:
    """Summary: SQLite-backed frequency store.

    Importance: Every counter update is one atomic upsert statement.
    Alternatives: Read counters, add in Python, and write them back.
    """

    def __init__(self, db_path: str) -> None:
        """Summary: Initialize the storage with a database path.

        Importance: Allows configurable database location per environment.
        Alternatives: Hardcode a default path in the class.
        """

        self._db_path = Path(db_path)

    def initialize(self) -> None:
        """Summary: Create tables if they do not exist.

        Importance: Ensures the database is ready for training and prediction.
        Alternatives: Run migrations using a dedicated migration tool.
        """

        with self._connection() as connection:
            cursor = connection.cursor()
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS training_examples (
                    id TEXT PRIMARY KEY,
                    transaction_id TEXT NOT NULL,
                    text TEXT NOT NULL,
                    category TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS word_frequency (
                    word TEXT NOT NULL,
                    category TEXT NOT NULL,
                    count INTEGER NOT NULL,
                    PRIMARY KEY (word, category)
                )
                """
            )
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS category_totals (
                    category TEXT PRIMARY KEY,
                    total_words INTEGER NOT NULL,
                    doc_count INTEGER NOT NULL
                )
                """
            )
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS model_meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            connection.commit()
        logger.info("Initialized model store at %s.", self._db_path)

    def increment_word(self, word: str, category: str, amount: int = 1) -> None:
        """Summary: Add to the count of a word under a category.

        Importance: Inserts the row when absent, in the same statement.
        Alternatives: Select the row first and branch in Python.
        """

        self.increment_words({word: amount}, category)

    def increment_words(self, counts: dict[str, int], category: str) -> None:
        """Summary: Add several word counts under one category in a single transaction.

        Importance: Applies a training call's word updates together.
        Alternatives: Commit after every word.
        """

        with self._connection() as connection:
            _upsert_words(connection.cursor(), counts, category)
            connection.commit()

    def increment_category_totals(self, category: str, token_mass: int) -> None:
        """Summary: Add token mass and one document to a category.

        Importance: Keeps priors and denominators consistent with word counts.
        Alternatives: Derive totals with aggregate queries at prediction time.
        """

        with self._connection() as connection:
            _upsert_category_totals(connection.cursor(), category, token_mass)
            connection.commit()

    def set_vocab_size(self, size: int) -> None:
        """Summary: Overwrite the global vocabulary size."""

        with self._connection() as connection:
            cursor = connection.cursor()
            cursor.execute(
                """
                INSERT INTO model_meta (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (VOCAB_SIZE_KEY, str(int(size))),
            )
            connection.commit()

    def increment_vocab_size(self, delta: int) -> None:
        """Summary: Add to the global vocabulary size in one statement.

        Importance: Avoids a read-then-write race between concurrent trainers.
        Alternatives: Read the value, add, and call set_vocab_size.
        """

        with self._connection() as connection:
            _upsert_vocab_delta(connection.cursor(), delta)
            connection.commit()

    def record_training(
        self,
        example: TrainingExample,
        counts: dict[str, int],
        token_mass: int,
        new_words: int,
    ) -> str:
        """Summary: Persist one training call as a single transaction.

        Importance: Word counts, category totals and vocab size move together or not at all.
        Alternatives: Commit each counter update separately.
        """

        with self._connection() as connection:
            cursor = connection.cursor()
            _insert_training_example(cursor, example)
            _upsert_words(cursor, counts, example.category)
            _upsert_category_totals(cursor, example.category, token_mass)
            if new_words:
                _upsert_vocab_delta(cursor, new_words)
            connection.commit()
        return example.id

    def get_vocab_size(self) -> int:
        """Summary: Return the global vocabulary size, 0 when unset."""

        with self._connection() as connection:
            cursor = connection.cursor()
            cursor.execute("SELECT value FROM model_meta WHERE key = ?", (VOCAB_SIZE_KEY,))
            row = cursor.fetchone()
        return int(row[0]) if row else 0

    def lookup_words(self, words: Iterable[str]) -> list[StoredWordFrequency]:
        """Summary: Fetch every (word, category, count) row for the given words.

        Importance: Reads only the counters a prediction needs.
        Alternatives: Load the full word table into memory.
        """

        unique = sorted(set(words))
        if not unique:
            return []
        placeholders = ", ".join("?" for _ in unique)
        with self._connection() as connection:
            cursor = connection.cursor()
            cursor.execute(
                f"""
                SELECT word, category, count
                FROM word_frequency
                WHERE word IN ({placeholders})
                ORDER BY word, category
                """,
                unique,
            )
            rows = cursor.fetchall()
        return [StoredWordFrequency(*row) for row in rows]

    def known_words(self, words: Iterable[str]) -> set[str]:
        """Summary: Return which of the given words exist under any category."""

        return {row.word for row in self.lookup_words(words)}

    def list_category_totals(self) -> list[StoredCategoryTotals]:
        """Summary: Return totals for every known category.

        Importance: Rows come back in first-trained order, which breaks score ties.
        Alternatives: Order alphabetically by category.
        """

        with self._connection() as connection:
            cursor = connection.cursor()
            cursor.execute(
                "SELECT category, total_words, doc_count FROM category_totals ORDER BY rowid"
            )
            rows = cursor.fetchall()
        return [StoredCategoryTotals(*row) for row in rows]

    def save_training_example(self, example: TrainingExample) -> str:
        """Summary: Persist a training audit record.

        Importance: Write-once history of labeling events.
        Alternatives: Keep the audit trail in log files.
        """

        with self._connection() as connection:
            _insert_training_example(connection.cursor(), example)
            connection.commit()
        return example.id

    def list_training_examples(self, limit: int) -> list[StoredTrainingExample]:
        """Summary: Retrieve recent training records, newest first."""

        with self._connection() as connection:
            cursor = connection.cursor()
            cursor.execute(
                """
                SELECT id, transaction_id, text, category, created_at
                FROM training_examples
                ORDER BY created_at DESC, rowid DESC
                LIMIT ?
                """,
                (limit,),
            )
            rows = cursor.fetchall()
        return [StoredTrainingExample(*row) for row in rows]

    def count_training_examples(self) -> int:
        with self._connection() as connection:
            cursor = connection.cursor()
            cursor.execute("SELECT COUNT(*) FROM training_examples")
            row = cursor.fetchone()
        return int(row[0])

    def reset(self) -> None:
        """Summary: Delete all counters and training records.

        Importance: Lets users wipe learned behavior for privacy.
        Alternatives: Delete the database file.
        """

        with self._connection() as connection:
            cursor = connection.cursor()
            for table in ("training_examples", "word_frequency", "category_totals", "model_meta"):
                cursor.execute(f"DELETE FROM {table}")
            connection.commit()
        logger.info("Cleared model store at %s.", self._db_path)

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Summary: Context manager for SQLite connections.

        Importance: Ensures connections are closed cleanly after use.
        Alternatives: Keep a single long-lived connection.
        """

        connection = sqlite3.connect(self._db_path)
        try:
            yield connection
        finally:
            connection.close()


def default_store_path() -> str:
    """Summary: Provide the default database path."""

    return "spendcat.db"


def _insert_training_example(cursor: sqlite3.Cursor, example: TrainingExample) -> None:
    cursor.execute(
        """
        INSERT INTO training_examples (id, transaction_id, text, category, created_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (
            example.id,
            example.transaction_id,
            example.text,
            example.category,
            example.created_at.isoformat(),
        ),
    )


def _upsert_words(cursor: sqlite3.Cursor, counts: dict[str, int], category: str) -> None:
    cursor.executemany(
        """
        INSERT INTO word_frequency (word, category, count)
        VALUES (?, ?, ?)
        ON CONFLICT(word, category) DO UPDATE SET count = count + excluded.count
        """,
        [(word, category, amount) for word, amount in counts.items()],
    )


def _upsert_category_totals(cursor: sqlite3.Cursor, category: str, token_mass: int) -> None:
    cursor.execute(
        """
        INSERT INTO category_totals (category, total_words, doc_count)
        VALUES (?, ?, 1)
        ON CONFLICT(category) DO UPDATE SET
            total_words = total_words + excluded.total_words,
            doc_count = doc_count + 1
        """,
        (category, token_mass),
    )


def _upsert_vocab_delta(cursor: sqlite3.Cursor, delta: int) -> None:
    # model_meta stores text values; cast for the arithmetic
    cursor.execute(
        """
        INSERT INTO model_meta (key, value) VALUES (?, ?)
        ON CONFLICT(key) DO UPDATE SET
            value = CAST(CAST(value AS INTEGER) + CAST(excluded.value AS INTEGER) AS TEXT)
        """,
        (VOCAB_SIZE_KEY, str(int(delta))),
    )
