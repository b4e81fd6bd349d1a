"""
Tests for the HTTP surface.
"""
import pytest
from fastapi.testclient import TestClient

from claimledger.config import Settings
from claimledger.main import create_app

from conftest import SUBMISSION


@pytest.fixture
def client(claim_router):
    app = create_app(Settings(policy_version="test"), claim_router=claim_router)
    with TestClient(app) as client:
        yield client


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_init_runs_at_startup(client, claim_router):
    assert claim_router.policy_version == "test"


def test_submit_and_query(client):
    response = client.post("/ledger/invoke", json={"function": "submitClaim", "args": SUBMISSION})
    assert response.status_code == 200

    response = client.post("/ledger/query", json={"function": "currentStage"})
    assert response.json() == {"function": "currentStage", "payload": "0"}


def test_verify_identity(client):
    client.post("/ledger/invoke", json={"function": "submitClaim", "args": SUBMISSION})

    response = client.post("/ledger/invoke", json={"function": "verifyIdentity", "args": []})
    assert response.json()["payload"] == '"User Details Verified!"'


@pytest.mark.parametrize("body,status_code,kind", [
    ({"function": "submitClaim", "args": SUBMISSION[:8]}, 400, "InvalidArgumentCount"),
    ({"function": "launch", "args": []}, 400, "UnknownOperation"),
    ({"function": "settle", "args": []}, 503, "PersistenceError"),
])
def test_invoke_errors(client, body, status_code, kind):
    response = client.post("/ledger/invoke", json=body)

    assert response.status_code == status_code
    assert response.json()["detail"]["kind"] == kind


def test_missing_key_is_404(client):
    response = client.post("/ledger/query", json={"function": "getClaim", "args": ["nonexistent"]})

    assert response.status_code == 404
    assert response.json()["detail"]["kind"] == "RecordNotFound"


def test_identity_mismatch_is_409(client):
    client.post("/ledger/invoke", json={"function": "submitClaim", "args": SUBMISSION})
    candidate = list(SUBMISSION[1:])
    candidate[2] = "other@x.com"

    response = client.post("/ledger/invoke", json={"function": "verifyIdentity", "args": candidate})
    assert response.status_code == 409


def test_illegal_transition_is_400(client):
    client.post("/ledger/invoke", json={"function": "submitClaim", "args": SUBMISSION})

    response = client.post("/ledger/invoke", json={"function": "settle", "args": []})
    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "IllegalTransition"


def test_advance_stage_is_not_exposed(client):
    client.post("/ledger/invoke", json={"function": "submitClaim", "args": SUBMISSION})

    response = client.post("/ledger/invoke", json={"function": "advanceStage", "args": ["1"]})
    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "UnknownOperation"

    response = client.post("/ledger/query", json={"function": "currentStage"})
    assert response.json()["payload"] == "0"


def test_corrupt_claim_is_422(client, store):
    store.put("claim", b"{garbage")

    response = client.post("/ledger/query", json={"function": "currentStage"})
    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "DecodeError"


def test_operations_listing(client):
    body = client.get("/ledger/operations").json()
    assert "settle" in body["invoke"]
    assert "getClaim" in body["query"]
