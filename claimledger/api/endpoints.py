"""
FastAPI Endpoints for the Claim Ledger

Exposes the router's invoke and query hooks over HTTP.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from claimledger.router import ClaimRouter, OperationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ledger", tags=["ledger"])

# error kind -> HTTP status
ERROR_STATUS = {
    "InvalidArgumentCount": status.HTTP_400_BAD_REQUEST,
    "IllegalTransition": status.HTTP_400_BAD_REQUEST,
    "UnknownOperation": status.HTTP_400_BAD_REQUEST,
    "RecordNotFound": status.HTTP_404_NOT_FOUND,
    "IdentityMismatch": status.HTTP_409_CONFLICT,
    "VehicleMismatch": status.HTTP_409_CONFLICT,
    "ClaimDetailsMismatch": status.HTTP_409_CONFLICT,
    "DecodeError": status.HTTP_422_UNPROCESSABLE_CONTENT,
    "StoreUnavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    "PersistenceError": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class OperationRequest(BaseModel):
    """Request model for a named ledger operation."""
    function: str = Field(..., description="Operation name, e.g. submitClaim")
    args: List[str] = Field(default_factory=list, description="Positional string arguments")


class OperationResponse(BaseModel):
    """Response model for a successful ledger operation."""
    function: str
    payload: Optional[str] = None


def get_claim_router(request: Request) -> ClaimRouter:
    return request.app.state.claim_router


def _respond(function: str, result: OperationResult) -> OperationResponse:
    if not result.ok:
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
            detail={"kind": result.error_kind, "message": result.message}
        )
    payload = result.payload.decode("utf-8", errors="replace") if result.payload is not None else None
    return OperationResponse(function=function, payload=payload)


@router.post("/invoke", response_model=OperationResponse)
async def invoke(
    body: OperationRequest,
    claim_router: ClaimRouter = Depends(get_claim_router)
) -> OperationResponse:
    """
    Run a state-changing operation.

    Examples: submitClaim, verifyIdentity, inspectIdentity, inspectVehicle, settle.
    """
    result = claim_router.invoke(body.function, body.args)
    return _respond(body.function, result)


@router.post("/query", response_model=OperationResponse)
async def query(
    body: OperationRequest,
    claim_router: ClaimRouter = Depends(get_claim_router)
) -> OperationResponse:
    """
    Run a read-only operation.

    Examples: getClaim, currentStage, currentStateMarker.
    """
    result = claim_router.query(body.function, body.args)
    return _respond(body.function, result)


@router.get("/operations")
async def list_operations(claim_router: ClaimRouter = Depends(get_claim_router)):
    """List the operation names each hook accepts."""
    return {
        "invoke": claim_router.invoke_operations,
        "query": claim_router.query_operations,
    }
