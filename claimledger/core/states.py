"""
Claim Stage Definitions

Defines the ordered processing stages of a car-insurance claim.
"""
from enum import IntEnum


class Stage(IntEnum):
    """
    Enum representing the processing stages of a claim.

    Flow: INIT_CLAIM -> IDENTITY_INSPECTION -> VEHICLE_INSPECTION -> CLAIM_INSPECTION -> SETTLEMENT
    """
    INIT_CLAIM = 0
    IDENTITY_INSPECTION = 1
    VEHICLE_INSPECTION = 2
    CLAIM_INSPECTION = 3
    SETTLEMENT = 4  # Terminal

    @classmethod
    def parse(cls, value) -> "Stage | None":
        """Return the Stage for an int or numeric string, or None if it is not one."""
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            return None
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return None
