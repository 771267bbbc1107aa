"""Summary: API integration tests.

Importance: Validates FastAPI endpoints against core workflows.
Alternatives: Use manual curl testing only.
"""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from spendcat.api import create_app
from spendcat.config import AppConfig


def _build_config(db_path: str, api_key: str = "", lexicon_path: str = "") -> AppConfig:
    """Summary: Build an AppConfig for API tests.

    Importance: Ensures tests use isolated storage.
    Alternatives: Load AppConfig from environment variables.
    """

    return AppConfig(
        db_path=db_path,
        api_host="127.0.0.1",
        api_port=8000,
        api_key=api_key,
        lexicon_path=lexicon_path,
        min_confidence=0.55,
        nb_threshold=0.6,
        override_threshold=0.85,
        fuzzy_score=0.85,
    )


def test_api_predict_uses_rules(tmp_path: Path) -> None:
    """Summary: Verify prediction works before any training.

    Importance: Confirms the HTTP layer wires into the rule engine.
    Alternatives: Validate only the service layer.
    """

    client = TestClient(create_app(_build_config(str(tmp_path / "test.db"))))
    response = client.post("/predict", json={"merchant": "Swiggy"})
    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "food"
    assert body["source"] == "rule"
    assert body["confidence"] == 1.0
    assert "exact: swiggy -> food" in body["explanation"]


def test_api_train_then_predict(tmp_path: Path) -> None:
    """Summary: Verify training through the API changes predictions.

    Importance: Confirms the feedback loop works end to end.
    Alternatives: Train only through the CLI.
    """

    client = TestClient(create_app(_build_config(str(tmp_path / "test.db"))))
    response = client.post(
        "/train",
        json={"transaction_id": "txn-1", "category": "fitness", "merchant": "Cult Gym"},
    )
    assert response.status_code == 200
    assert response.json()["trained"] is True

    predicted = client.post("/predict", json={"note": "cult"}).json()
    assert predicted["category"] == "fitness"
    assert predicted["source"] == "nb"

    stats = client.get("/stats").json()
    assert stats["documents"] == 1
    assert stats["vocab_size"] == 2

    examples = client.get("/training-examples").json()
    assert examples[0]["transaction_id"] == "txn-1"

    assert client.post("/model/reset").status_code == 200
    assert client.get("/stats").json()["documents"] == 0


def test_api_train_validation(tmp_path: Path) -> None:
    """Summary: Verify invalid training payloads are rejected.

    Importance: Unlabeled or malformed requests must not reach the model.
    Alternatives: Accept and ignore invalid payloads.
    """

    client = TestClient(create_app(_build_config(str(tmp_path / "test.db"))))
    blank = client.post("/train", json={"transaction_id": "txn-1", "category": "  ", "note": "uber"})
    assert blank.status_code == 400
    missing = client.post("/train", json={"category": "food", "note": "uber"})
    assert missing.status_code == 422
    empty = client.post("/train", json={"transaction_id": "txn-2", "category": "food"})
    assert empty.status_code == 200
    assert empty.json()["trained"] is False


def test_api_requires_key_when_configured(tmp_path: Path) -> None:
    """Summary: Verify the API key guard.

    Importance: Private deployments reject anonymous callers.
    Alternatives: Rely on network isolation only.
    """

    client = TestClient(create_app(_build_config(str(tmp_path / "test.db"), api_key="secret")))
    assert client.get("/health").status_code == 200
    assert client.post("/predict", json={"note": "uber"}).status_code == 401
    ok = client.post("/predict", json={"note": "uber"}, headers={"X-API-Key": "secret"})
    assert ok.status_code == 200


def test_api_serves_configured_lexicon(tmp_path: Path) -> None:
    """Summary: Verify a custom lexicon file replaces the built-in one.

    Importance: Deployments can ship their own keywords.
    Alternatives: Only allow the built-in lexicon.
    """

    lexicon_path = tmp_path / "lexicon.json"
    lexicon_path.write_text('{"pets": ["petco", "vet"]}', encoding="utf-8")
    config = _build_config(str(tmp_path / "test.db"), lexicon_path=str(lexicon_path))
    client = TestClient(create_app(config))
    assert client.get("/lexicon").json() == {"pets": ["petco", "vet"]}
    assert client.post("/predict", json={"note": "petco store"}).json()["category"] == "pets"


def test_api_train_coerces_malformed_weights(tmp_path: Path) -> None:
    """Summary: Verify missing or non-numeric weights still train with weight one.

    Importance: Malformed weights are coerced rather than rejected.
    Alternatives: Reject invalid weights with a validation error.
    """

    client = TestClient(create_app(_build_config(str(tmp_path / "test.db"))))
    for index, weight in enumerate([None, "abc", -3, 2.6]):
        response = client.post(
            "/train",
            json={
                "transaction_id": f"txn-{index}",
                "category": "transport",
                "note": "uber ride",
                "weight": weight,
            },
        )
        assert response.status_code == 200
        assert response.json()["trained"] is True
    stats = client.get("/stats").json()
    assert stats["documents"] == 4
    assert stats["category_totals"][0]["total_words"] == 2 + 2 + 2 + 6
