"""Summary: FastAPI application for SpendCat.

Importance: Exposes prediction and training over HTTP for app and UI clients.
Alternatives: Use a CLI-only workflow or a different web framework.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

from spendcat.app import build_services
from spendcat.config import AppConfig


class PredictRequest(BaseModel):
    """Summary: Request payload for category prediction.

    Importance: Accepts the note and merchant separately, as the app stores them.
    Alternatives: Accept a single free-text field only.
    """

    note: str | None = None
    merchant: str | None = None


class TrainRequest(BaseModel):
    """Summary: Request payload for training on a confirmed category.

    Importance: Keeps training inputs explicit for API clients.
    Alternatives: Train implicitly when a transaction is saved.
    """

    transaction_id: str
    category: str = Field(min_length=1)
    note: str | None = None
    merchant: str | None = None
    weight: Any = 1


def create_app(config: AppConfig) -> FastAPI:
    """Summary: Create a FastAPI app wired to SpendCat services.

    Importance: Ensures the API layer shares the same configuration and storage.
    Alternatives: Instantiate services globally outside the factory.
    """

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = FastAPI(title="SpendCat API", version="0.1.0")
    services = build_services(config)

    def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
        """Summary: Enforce API key authentication when configured.

        Importance: Adds a minimal security layer for local and private deployments.
        Alternatives: Use OAuth or session-based authentication.
        """

        if not config.api_key:
            return
        if x_api_key != config.api_key:
            raise HTTPException(status_code=401, detail="Invalid API key")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/predict", dependencies=[Depends(require_api_key)])
    def predict(payload: PredictRequest) -> dict[str, Any]:
        """Summary: Suggest a category for a transaction description.

        Importance: Called when a user views an uncategorized transaction.
        Alternatives: Precompute suggestions at import time.
        """

        result = services.categorization.classify(payload.note, payload.merchant)
        return {
            "category": result.category,
            "confidence": result.confidence,
            "source": result.source,
            "explanation": result.explanation,
        }

    @app.post("/train", dependencies=[Depends(require_api_key)])
    def train(payload: TrainRequest) -> dict[str, Any]:
        """Summary: Learn from a category the user confirmed.

        Importance: Closes the feedback loop from UI edits to the model.
        Alternatives: Batch corrections and retrain offline.
        """

        try:
            example_id = services.categorization.train(
                payload.transaction_id,
                payload.category,
                note=payload.note,
                merchant=payload.merchant,
                weight=payload.weight,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"trained": example_id is not None, "example_id": example_id}

    @app.get("/stats", dependencies=[Depends(require_api_key)])
    def stats() -> dict[str, Any]:
        return services.model.snapshot()

    @app.get("/training-examples", dependencies=[Depends(require_api_key)])
    def list_training_examples(limit: int = 20) -> list[dict[str, Any]]:
        return [
            {
                "id": example.id,
                "transaction_id": example.transaction_id,
                "text": example.text,
                "category": example.category,
                "created_at": example.created_at,
            }
            for example in services.model.list_training_examples(limit)
        ]

    @app.post("/model/reset", dependencies=[Depends(require_api_key)])
    def reset_model() -> dict[str, str]:
        services.model.reset_model()
        return {"status": "reset"}

    @app.get("/lexicon", dependencies=[Depends(require_api_key)])
    def lexicon() -> dict[str, list[str]]:
        return services.lexicon.as_dict()

    return app


def build_default_app() -> FastAPI:
    """Summary: Build the app from environment configuration.

    Importance: Serves as the factory for ASGI servers.
    Alternatives: Create the app at import time.
    """

    return create_app(AppConfig.from_env())
