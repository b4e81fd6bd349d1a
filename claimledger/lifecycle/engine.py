"""
Claim Lifecycle Engine

Creates claims, answers stage queries and runs the verification checks that
gate each stage transition. Nothing is kept between calls; all state lives
in the record store.
"""
import logging
from typing import Sequence

from claimledger.core.errors import (
    ClaimDetailsMismatch,
    DecodeError,
    IdentityMismatch,
    InvalidArgumentCount,
    NotFoundOrStoreError,
    PersistenceError,
    VehicleMismatch,
)
from claimledger.core.models import (
    CLAIM_KEY,
    CURRENT_STATE_KEY,
    Claim,
    PolicyHolder,
    decode_claim,
    encode,
    encode_stage,
    new_claim,
    new_policy_holder,
)
from claimledger.core.states import Stage
from claimledger.state_machine.machine import ClaimStateMachine
from claimledger.store.adapter import RecordStore

logger = logging.getLogger(__name__)

IDENTITY_VERIFIED = "User Details Verified!"
VEHICLE_VERIFIED = "Vehicle Details Verified!"
CLAIM_VERIFIED = "Claim Details Verified!"

SUBMIT_ARGS = (
    "IncidentDate", "FirstName", "LastName", "Email", "SSN",
    "BirthDate", "PolicyId", "VIN", "LicencePlateNumber",
)


def require_args(operation: str, args: Sequence[str], expected: int) -> None:
    """Raise InvalidArgumentCount unless exactly ``expected`` arguments were given."""
    if len(args) != expected:
        raise InvalidArgumentCount(operation, expected, len(args))


class ClaimLifecycleEngine:
    """
    Orchestrates a claim from submission to settlement.

    Every mutation reads the whole claim record, changes the in-memory copy
    and rewrites the whole record. The ``current_state`` marker is never
    stored; it is recomputed from the claim's status when asked for.
    """

    def __init__(self, store: RecordStore, state_machine: ClaimStateMachine | None = None):
        """
        Initialize the lifecycle engine.

        Args:
            store: Key-value store holding the claim record
            state_machine: Transition rules, defaults to the standard flow
        """
        self.store = store
        self.state_machine = state_machine or ClaimStateMachine()

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    def _load_claim(self) -> Claim:
        try:
            data = self.store.get(CLAIM_KEY)
        except NotFoundOrStoreError as e:
            raise PersistenceError("Failed to retrieve claim details") from e
        return decode_claim(data, CLAIM_KEY)

    def _save_claim(self, claim: Claim) -> None:
        try:
            self.store.put(CLAIM_KEY, encode(claim))
        except NotFoundOrStoreError as e:
            raise PersistenceError("Error saving claim") from e

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def submit_claim(self, args: Sequence[str]) -> Claim:
        """
        Create a new claim and save it at INIT_CLAIM.

        Args:
            args: IncidentDate, FirstName, LastName, Email, SSN, BirthDate,
                PolicyId, VIN, LicencePlateNumber

        Raises:
            InvalidArgumentCount: If not exactly nine arguments were given
            PersistenceError: If the claim could not be written
        """
        require_args("submitClaim", args, len(SUBMIT_ARGS))

        holder = new_policy_holder(*args[1:9])
        claim = new_claim("", args[0], holder)
        claim.record_stage_change(Stage.INIT_CLAIM)

        self._save_claim(claim)
        logger.info(f"Submitted claim for incident on {claim.incident_date}")
        return claim

    def fetch_claim(self, args: Sequence[str]) -> bytes:
        """
        Return the raw bytes stored under a key.

        The ``current_state`` key is served from the claim record, so reading
        it also decodes that record.

        Raises:
            InvalidArgumentCount: If not exactly one argument was given
            RecordNotFound: If nothing is stored under the key
            StoreUnavailable: If the store failed
            DecodeError: If ``current_state`` was asked for and the claim
                record is malformed
        """
        require_args("fetchClaim", args, 1)
        key = args[0]
        if key == CURRENT_STATE_KEY:
            return self._marker_bytes()
        return self.store.get(key)

    def current_stage(self) -> Stage:
        """Derive the claim's stage from the claim record."""
        claim = self._load_claim()
        if claim.status is None:
            raise DecodeError(CLAIM_KEY, "claim has no status")
        return claim.status

    def current_state_marker(self) -> bytes:
        """Serialized current stage, recomputed from the claim record."""
        return encode_stage(self.current_stage())

    def _marker_bytes(self) -> bytes:
        claim = decode_claim(self.store.get(CLAIM_KEY), CLAIM_KEY)
        if claim.status is None:
            raise DecodeError(CLAIM_KEY, "claim has no status")
        return encode_stage(claim.status)

    def verify_identity(self, candidate: PolicyHolder) -> str:
        """
        Compare a candidate policyholder against the stored claim's holder.

        All eight fields must match exactly. The failure does not say which
        field differed.

        Raises:
            IdentityMismatch: If any field differs
        """
        claim = self._load_claim()
        if claim.user_details != candidate:
            logger.warning("Identity verification failed")
            raise IdentityMismatch()
        logger.info(IDENTITY_VERIFIED)
        return IDENTITY_VERIFIED

    def verify_vehicle(self, vin: str, licence_plate_number: str) -> str:
        """Check the VIN and licence plate recorded on the claim."""
        holder = self._load_claim().user_details
        if (holder.vin, holder.licence_plate_number) != (vin, licence_plate_number):
            logger.warning("Vehicle verification failed")
            raise VehicleMismatch()
        logger.info(VEHICLE_VERIFIED)
        return VEHICLE_VERIFIED

    def verify_claim_details(self, incident_date: str, policy_id: str) -> str:
        """Check the incident date and policy the claim was filed under."""
        claim = self._load_claim()
        if (claim.incident_date, claim.user_details.policy_id) != (incident_date, policy_id):
            logger.warning("Claim details verification failed")
            raise ClaimDetailsMismatch()
        logger.info(CLAIM_VERIFIED)
        return CLAIM_VERIFIED

    def advance_stage(self, target) -> Claim:
        """
        Move the claim to ``target`` if it is the next stage.

        Asking for the stage the claim is already in leaves the record
        untouched.

        Raises:
            IllegalTransition: If target is not the current or the next stage
        """
        claim = self._load_claim()
        previous = claim.status

        if self.state_machine.transition(claim, target):
            self._save_claim(claim)
            logger.info(f"Claim advanced from {previous.name} to {claim.status.name}")
        else:
            logger.info(f"Claim already at {claim.status.name}, nothing to do")
        return claim

    # ------------------------------------------------------------------
    # Gated inspections
    # ------------------------------------------------------------------

    def inspect_identity(self, candidate: PolicyHolder) -> str:
        log = self.verify_identity(candidate)
        self.advance_stage(Stage.IDENTITY_INSPECTION)
        return log

    def inspect_vehicle(self, vin: str, licence_plate_number: str) -> str:
        log = self.verify_vehicle(vin, licence_plate_number)
        self.advance_stage(Stage.VEHICLE_INSPECTION)
        return log

    def inspect_claim(self, incident_date: str, policy_id: str) -> str:
        log = self.verify_claim_details(incident_date, policy_id)
        self.advance_stage(Stage.CLAIM_INSPECTION)
        return log

    def settle(self) -> Claim:
        """Move an inspected claim to SETTLEMENT."""
        return self.advance_stage(Stage.SETTLEMENT)
