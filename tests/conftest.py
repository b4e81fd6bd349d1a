"""Shared fixtures for claim ledger tests."""
import pytest

from claimledger.core.errors import StoreUnavailable
from claimledger.core.models import new_policy_holder
from claimledger.lifecycle import ClaimLifecycleEngine
from claimledger.router import ClaimRouter
from claimledger.store import InMemoryRecordStore

SUBMISSION = [
    "2023-01-05", "Jane", "Doe", "jane@x.com", "SSN1",
    "1990-01-01", "POLY1", "VIN1", "PLATE1",
]


class FailingRecordStore(InMemoryRecordStore):
    """In-memory store that can be told to fail reads or writes."""

    def __init__(self):
        super().__init__()
        self.fail_get = False
        self.fail_put = False

    def get(self, key: str) -> bytes:
        if self.fail_get:
            raise StoreUnavailable(key, "simulated outage")
        return super().get(key)

    def put(self, key: str, value: bytes) -> None:
        if self.fail_put:
            raise StoreUnavailable(key, "simulated outage")
        super().put(key, value)


@pytest.fixture
def store():
    return FailingRecordStore()


@pytest.fixture
def engine(store):
    return ClaimLifecycleEngine(store)


@pytest.fixture
def submitted(engine):
    """Engine with the sample claim already submitted."""
    engine.submit_claim(SUBMISSION)
    return engine


@pytest.fixture
def holder():
    return new_policy_holder(*SUBMISSION[1:])


@pytest.fixture
def claim_router(engine, holder):
    return ClaimRouter(engine, identity_source=lambda: holder)
