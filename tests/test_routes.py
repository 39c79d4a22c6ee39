"""
Tests for the HTTP surface (POST /api/chat, GET /health).
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeClient
from medchat.main import app
from medchat.orchestrator import ConversationOrchestrator
from medchat.routes import get_orchestrator


@pytest.fixture
def client_factory():
    def _make(fake):
        app.dependency_overrides[get_orchestrator] = lambda: ConversationOrchestrator(fake)
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_health():
    assert TestClient(app).get("/health").json() == {"ok": True}


def test_chat_response_shape(client_factory):
    fake = FakeClient()
    client = client_factory(fake)

    resp = client.post("/api/chat", json={
        "conversation": [{"role": "user", "content": "I have a 104F fever for 5 days"}],
        "lastDiagnosis": [],
    })

    assert resp.status_code == 200
    data = resp.json()
    assert data["text"] == "How long have you had the fever?"
    assert data["urgency"]["code"] == "URGENT_CARE"
    assert data["urgency"]["text"].startswith("[URGENT_CARE]")
    assert data["diagnosis"][0] == {"name": "Influenza", "status": "TRUE"}
    assert data["risks"][0] == {"condition": "Hypertension", "riskLevel": "[LOW]"}
    assert data["errors"] == {}


def test_last_diagnosis_is_optional(client_factory):
    client = client_factory(FakeClient())
    resp = client.post("/api/chat", json={"conversation": [{"role": "user", "content": "hello"}]})
    assert resp.status_code == 200


def test_last_diagnosis_forwarded_to_diagnosis_prompt(client_factory):
    fake = FakeClient()
    client = client_factory(fake)
    client.post("/api/chat", json={
        "conversation": [
            {"role": "user", "content": "I'm thirsty a lot"},
            {"role": "assistant", "content": "How often do you urinate?"},
            {"role": "user", "content": "Very often"},
        ],
        "lastDiagnosis": [{"role": "assistant", "content": "1. Diabetes - [MORE_INFO]"}],
    })

    diagnosis_call = next(c for c in fake.calls if "suggests potential conditions" in c[0].content)
    assert [m.content for m in diagnosis_call[-2:]] == ["1. Diabetes - [MORE_INFO]", "Very often"]


def test_partial_failure_is_still_200(client_factory):
    client = client_factory(FakeClient(fail={"urgency"}))
    resp = client.post("/api/chat", json={"conversation": [{"role": "user", "content": "cough"}]})

    assert resp.status_code == 200
    data = resp.json()
    assert data["urgency"] is None
    assert "urgency" in data["errors"]
    assert len(data["risks"]) == 3


def test_total_failure_is_502(client_factory):
    client = client_factory(FakeClient(fail={"chat", "urgency", "diagnosis", "risk"}))
    resp = client.post("/api/chat", json={"conversation": [{"role": "user", "content": "cough"}]})

    assert resp.status_code == 502
    assert "All model calls failed" in resp.json()["detail"]


@pytest.mark.parametrize("body", [
    {"conversation": []},
    {},
    {"conversation": [{"role": "doctor", "content": "hi"}]},
])
def test_invalid_requests_rejected(client_factory, body):
    client = client_factory(FakeClient())
    assert client.post("/api/chat", json=body).status_code == 422
