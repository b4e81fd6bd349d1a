"""
Tests for the init/invoke/query router.
"""
import pytest

from claimledger.core.models import decode_claim
from claimledger.core.states import Stage
from claimledger.router import ClaimRouter

from conftest import SUBMISSION


@pytest.fixture
def submitted_router(claim_router):
    assert claim_router.invoke("submitClaim", SUBMISSION).ok
    return claim_router


class TestInit:
    def test_accepts_one_argument(self, claim_router):
        result = claim_router.init(["v1"])

        assert result.ok
        assert result.payload is None
        assert claim_router.policy_version == "v1"

    @pytest.mark.parametrize("args", [[], ["v1", "v2"]])
    def test_wrong_argument_count(self, claim_router, args):
        result = claim_router.init(args)

        assert not result.ok
        assert result.error_kind == "InvalidArgumentCount"

    def test_available_through_invoke(self, claim_router):
        assert claim_router.invoke("init", ["v1"]).ok


class TestDispatch:
    def test_unknown_invoke(self, claim_router):
        result = claim_router.invoke("deleteClaim", [])

        assert not result.ok
        assert result.error_kind == "UnknownOperation"
        assert "deleteClaim" in result.message

    def test_queries_are_not_invokable(self, claim_router):
        assert claim_router.invoke("getClaim", ["claim"]).error_kind == "UnknownOperation"

    def test_invokes_are_not_queryable(self, claim_router):
        assert claim_router.query("submitClaim", SUBMISSION).error_kind == "UnknownOperation"

    def test_lists_operations(self, claim_router):
        assert "submitClaim" in claim_router.invoke_operations
        assert "currentStage" in claim_router.query_operations


class TestClaimOperations:
    def test_submit_then_query(self, submitted_router, holder):
        stage = submitted_router.query("currentStage", [])
        claim = submitted_router.query("getClaim", ["claim"])

        assert stage.payload == b"0"
        assert decode_claim(claim.payload).user_details == holder

    def test_submit_wrong_argument_count(self, claim_router):
        result = claim_router.invoke("submitClaim", SUBMISSION[:8])
        assert result.error_kind == "InvalidArgumentCount"

    def test_fetch_missing_key(self, claim_router):
        result = claim_router.query("fetchClaim", ["nonexistent"])

        assert not result.ok
        assert result.error_kind == "RecordNotFound"

    def test_fetch_with_store_down(self, submitted_router, store):
        store.fail_get = True
        assert submitted_router.query("getClaim", ["claim"]).error_kind == "StoreUnavailable"

    def test_current_stage_without_claim(self, claim_router):
        assert claim_router.query("currentStage", []).error_kind == "PersistenceError"

    def test_current_state_marker(self, submitted_router):
        assert submitted_router.query("currentStateMarker", []).payload == b"0"


class TestVerifyIdentity:
    def test_uses_identity_source(self, submitted_router):
        result = submitted_router.invoke("verifyIdentity", [])

        assert result.ok
        assert result.payload == b'"User Details Verified!"'

    def test_explicit_candidate(self, submitted_router):
        assert submitted_router.invoke("verifyIdentity", SUBMISSION[1:]).ok

    def test_mismatched_email(self, submitted_router):
        candidate = list(SUBMISSION[1:])
        candidate[2] = "other@x.com"

        result = submitted_router.invoke("verifyIdentity", candidate)

        assert not result.ok
        assert result.error_kind == "IdentityMismatch"

    def test_no_source_and_no_arguments(self, engine):
        router = ClaimRouter(engine)
        engine.submit_claim(SUBMISSION)

        assert router.invoke("verifyIdentity", []).error_kind == "InvalidArgumentCount"

    def test_partial_candidate(self, submitted_router):
        result = submitted_router.invoke("verifyIdentity", SUBMISSION[1:4])
        assert result.error_kind == "InvalidArgumentCount"


class TestStageOperations:
    def test_full_lifecycle(self, submitted_router, engine):
        steps = [
            ("inspectIdentity", []),
            ("inspectVehicle", ["VIN1", "PLATE1"]),
            ("inspectClaim", ["2023-01-05", "POLY1"]),
            ("settle", []),
        ]
        for function, args in steps:
            result = submitted_router.invoke(function, args)
            assert result.ok, result.message

        assert engine.current_stage() == Stage.SETTLEMENT
        assert submitted_router.invoke("settle", []).payload == b"4"

    @pytest.mark.parametrize("target", ["1", "2", "3", "4"])
    def test_no_ungated_advancement(self, submitted_router, engine, target):
        result = submitted_router.invoke("advanceStage", [target])

        assert result.error_kind == "UnknownOperation"
        assert engine.current_stage() == Stage.INIT_CLAIM

    def test_settle_before_inspections_is_illegal(self, submitted_router, engine):
        assert submitted_router.invoke("settle", []).error_kind == "IllegalTransition"
        assert engine.current_stage() == Stage.INIT_CLAIM

    def test_vehicle_before_identity_is_illegal(self, submitted_router):
        result = submitted_router.invoke("inspectVehicle", ["VIN1", "PLATE1"])
        assert result.error_kind == "IllegalTransition"

    def test_verify_vehicle_does_not_advance(self, submitted_router, engine):
        assert submitted_router.invoke("verifyVehicle", ["VIN1", "PLATE1"]).ok
        assert engine.current_stage() == Stage.INIT_CLAIM

    def test_verify_claim_mismatch(self, submitted_router):
        result = submitted_router.invoke("verifyClaim", ["2023-01-05", "POLY9"])
        assert result.error_kind == "ClaimDetailsMismatch"

    def test_inspect_vehicle_mismatch(self, submitted_router):
        submitted_router.invoke("inspectIdentity", [])
        result = submitted_router.invoke("inspectVehicle", ["VIN9", "PLATE1"])
        assert result.error_kind == "VehicleMismatch"
