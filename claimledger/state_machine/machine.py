"""
Claim State Machine

Manages forward-only stage transitions for car-insurance claims.
"""
from typing import Dict, List, Set

from claimledger.core.errors import IllegalTransition
from claimledger.core.models import Claim
from claimledger.core.states import Stage


class ClaimStateMachine:
    """
    State machine for managing claim stage transitions.

    A claim moves strictly one stage forward at a time and stops at
    SETTLEMENT. Re-entering the current stage is accepted and changes nothing.
    """

    # from_stage -> set of valid to_stages
    TRANSITIONS: Dict[Stage, Set[Stage]] = {
        Stage.INIT_CLAIM: {Stage.IDENTITY_INSPECTION},
        Stage.IDENTITY_INSPECTION: {Stage.VEHICLE_INSPECTION},
        Stage.VEHICLE_INSPECTION: {Stage.CLAIM_INSPECTION},
        Stage.CLAIM_INSPECTION: {Stage.SETTLEMENT},
        Stage.SETTLEMENT: set()  # Terminal stage
    }

    def get_valid_transitions(self, claim: Claim) -> List[Stage]:
        """Get list of valid next stages for a claim."""
        if claim.status is None:
            return []
        return sorted(self.TRANSITIONS.get(claim.status, set()))

    def can_transition(self, claim: Claim, target: Stage) -> bool:
        """Check if a transition to target is valid."""
        return target in self.get_valid_transitions(claim)

    def transition(self, claim: Claim, target) -> bool:
        """
        Execute a stage transition.

        Args:
            claim: The claim to transition, mutated in place
            target: The desired stage, as a Stage or its integer value

        Returns:
            True if the claim changed, False if it was already at target

        Raises:
            IllegalTransition: If target is not the current or the next stage
        """
        stage = Stage.parse(target)
        if stage is None:
            raise IllegalTransition(f"{target!r} is not a claim stage")

        if claim.status is None:
            raise IllegalTransition(
                f"Claim {claim.id!r} has no stage; it must be submitted first"
            )

        if stage == claim.status:
            return False

        if not self.can_transition(claim, stage):
            valid = self.get_valid_transitions(claim)
            raise IllegalTransition(
                f"Invalid transition from {claim.status.name} to {stage.name}. "
                f"Valid transitions: {[s.name for s in valid]}"
            )

        claim.record_stage_change(stage)
        return True

