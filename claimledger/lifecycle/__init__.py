from .engine import (
    CLAIM_VERIFIED,
    IDENTITY_VERIFIED,
    VEHICLE_VERIFIED,
    ClaimLifecycleEngine,
    require_args,
)

__all__ = [
    "CLAIM_VERIFIED",
    "IDENTITY_VERIFIED",
    "VEHICLE_VERIFIED",
    "ClaimLifecycleEngine",
    "require_args",
]
