"""Summary: Application configuration for SpendCat.

Importance: Centralizes environment, .env, and config defaults for consistent behavior.
Alternatives: Use a dedicated settings library like Pydantic Settings.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from dataclasses import dataclass

from spendcat.storage.sqlite_store import default_store_path


@dataclass(frozen=True)
class AppConfig:
    """Summary: Holds configuration values for storage, thresholds and the API.

    Importance: Ensures all services derive settings from a single source of truth.
    Alternatives: Store settings in a shared config file and parse at startup.
    """

    db_path: str
    api_host: str
    api_port: int
    api_key: str
    lexicon_path: str
    min_confidence: float
    nb_threshold: float
    override_threshold: float
    fuzzy_score: float

    @staticmethod
    def from_env() -> "AppConfig":
        """Summary: Build configuration from defaults, .env, and environment.

        Importance: Keeps all variables defined in config defaults while allowing overrides.
        Alternatives: Parse only environment variables without a defaults file.
        """

        defaults = load_defaults(Path("config") / "defaults.json")
        load_dotenv(Path(".env"))
        return AppConfig(
            db_path=os.getenv("SPENDCAT_DB_PATH", defaults["db_path"]) or default_store_path(),
            api_host=os.getenv("SPENDCAT_API_HOST", defaults["api_host"]),
            api_port=int(os.getenv("SPENDCAT_API_PORT", defaults["api_port"])),
            api_key=os.getenv("SPENDCAT_API_KEY", defaults["api_key"]),
            lexicon_path=os.getenv("SPENDCAT_LEXICON_PATH", defaults["lexicon_path"]),
            min_confidence=float(
                os.getenv("SPENDCAT_MIN_CONFIDENCE", defaults["min_confidence"])
            ),
            nb_threshold=float(os.getenv("SPENDCAT_NB_THRESHOLD", defaults["nb_threshold"])),
            override_threshold=float(
                os.getenv("SPENDCAT_OVERRIDE_THRESHOLD", defaults["override_threshold"])
            ),
            fuzzy_score=float(os.getenv("SPENDCAT_FUZZY_SCORE", defaults["fuzzy_score"])),
        )


def load_defaults(path: Path) -> dict[str, str]:
    """Summary: Load configuration defaults from JSON.

    Importance: Ensures all variables exist in a single config file.
    Alternatives: Inline defaults in the AppConfig initializer.
    """

    if not path.exists():
        raise FileNotFoundError(f"Defaults file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def load_dotenv(path: Path) -> None:
    """Summary: Load key-value pairs from a .env file into the environment.

    Importance: Keeps local overrides out of code while supporting local workflows.
    Alternatives: Use python-dotenv or OS-specific secret stores.
    """

    if not path.exists():
        return
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())
