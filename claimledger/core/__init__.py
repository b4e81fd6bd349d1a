# Core module - stages, models and errors
from .states import Stage
from .models import (
    CLAIM_KEY,
    CURRENT_STATE_KEY,
    Claim,
    PolicyHolder,
    decode_claim,
    decode_policy_holder,
    decode_stage,
    encode,
    encode_stage,
    new_claim,
    new_policy_holder,
)
from .errors import (
    ClaimDetailsMismatch,
    ClaimLedgerError,
    DecodeError,
    IdentityMismatch,
    IllegalTransition,
    InvalidArgumentCount,
    NotFoundOrStoreError,
    PersistenceError,
    RecordNotFound,
    StoreUnavailable,
    UnknownOperation,
    VehicleMismatch,
    VerificationFailed,
)

__all__ = [
    "Stage",
    "CLAIM_KEY",
    "CURRENT_STATE_KEY",
    "Claim",
    "PolicyHolder",
    "decode_claim",
    "decode_policy_holder",
    "decode_stage",
    "encode",
    "encode_stage",
    "new_claim",
    "new_policy_holder",
    "ClaimDetailsMismatch",
    "ClaimLedgerError",
    "DecodeError",
    "IdentityMismatch",
    "IllegalTransition",
    "InvalidArgumentCount",
    "NotFoundOrStoreError",
    "PersistenceError",
    "RecordNotFound",
    "StoreUnavailable",
    "UnknownOperation",
    "VehicleMismatch",
    "VerificationFailed",
]
