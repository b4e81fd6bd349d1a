"""
Claim Pydantic Models

Defines the policyholder and claim records and their ledger encoding.
Field aliases are the tags used in the stored JSON.
"""
import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import DecodeError
from .states import Stage

CLAIM_KEY = "claim"
CURRENT_STATE_KEY = "current_state"


class PolicyHolder(BaseModel):
    """
    Insured individual's identity and policy attributes.

    Two holders are the same person only when all eight fields are equal.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    first_name: str = Field(..., alias="FirstName")
    last_name: str = Field(..., alias="LastName")
    email: str = Field(..., alias="Email")
    ssn: str = Field(..., alias="SSN", description="National identification number")
    birth_date: str = Field(..., alias="BirthDate")
    policy_id: str = Field(..., alias="PolicyId")
    vin: str = Field(..., alias="VIN", description="Vehicle identification number")
    licence_plate_number: str = Field(..., alias="LicencePlateNumber")


class Claim(BaseModel):
    """
    Car Insurance Claim Model

    A single record holding the incident, the embedded policyholder and the
    current processing stage.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(default="", alias="Id", description="Claim identifier, assigned externally")
    incident_date: str = Field(..., alias="IncidentDate")
    user_details: PolicyHolder = Field(..., alias="UserDetails")
    status: Optional[Stage] = Field(
        default=None,
        alias="Status",
        description="Current stage, set to INIT_CLAIM on submission"
    )

    def record_stage_change(self, new_stage: Stage) -> None:
        """Move the claim to a new stage."""
        self.status = new_stage


def new_policy_holder(
    first_name: str,
    last_name: str,
    email: str,
    ssn: str,
    birth_date: str,
    policy_id: str,
    vin: str,
    licence_plate_number: str,
) -> PolicyHolder:
    return PolicyHolder(
        first_name=first_name,
        last_name=last_name,
        email=email,
        ssn=ssn,
        birth_date=birth_date,
        policy_id=policy_id,
        vin=vin,
        licence_plate_number=licence_plate_number,
    )


def new_claim(id: str, incident_date: str, holder: PolicyHolder) -> Claim:
    """Build a claim with its status left unset."""
    return Claim(id=id, incident_date=incident_date, user_details=holder)


def encode(entity: BaseModel) -> bytes:
    """Serialize a PolicyHolder or Claim to its stored bytes."""
    return entity.model_dump_json(by_alias=True).encode("utf-8")


def _decode(model: type[BaseModel], data: bytes, key: str) -> BaseModel:
    try:
        return model.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(key, f"{e.error_count()} validation error(s)") from e


def decode_policy_holder(data: bytes, key: str = "policy_holder") -> PolicyHolder:
    return _decode(PolicyHolder, data, key)


def decode_claim(data: bytes, key: str = CLAIM_KEY) -> Claim:
    """
    Parse stored bytes into a Claim.

    Raises:
        DecodeError: If the bytes are not a valid claim record
    """
    return _decode(Claim, data, key)


def encode_stage(stage: Stage) -> bytes:
    return json.dumps(int(stage)).encode("utf-8")


def decode_stage(data: bytes, key: str = CURRENT_STATE_KEY) -> Stage:
    try:
        value = json.loads(data)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError(key, str(e)) from e
    if isinstance(value, bool) or not isinstance(value, int) or Stage.parse(value) is None:
        raise DecodeError(key, f"{value!r} is not a stage")
    return Stage(value)
