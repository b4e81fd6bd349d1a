"""
Car Insurance Claim Ledger

FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from claimledger.api import router as ledger_router
from claimledger.config import Settings, get_settings
from claimledger.lifecycle import ClaimLifecycleEngine
from claimledger.router import ClaimRouter

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(settings: Settings | None = None, claim_router: ClaimRouter | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use, defaults to the environment
        claim_router: Pre-built router, e.g. over a test store
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management."""
        logger.info("Starting Claim Ledger")
        router = claim_router or ClaimRouter(ClaimLifecycleEngine(settings.build_store()))
        result = router.init([settings.policy_version])
        if not result.ok:
            raise RuntimeError(result.message)
        app.state.claim_router = router
        yield
        logger.info("Shutting down Claim Ledger")

    app = FastAPI(
        title="Car Insurance Claim Ledger",
        description="""
    Tracks a car-insurance claim through its verification stages.

    ## Stages

    INIT_CLAIM → IDENTITY_INSPECTION → VEHICLE_INSPECTION → CLAIM_INSPECTION → SETTLEMENT

    ## Workflow

    1. Submit a claim with `POST /ledger/invoke` and `function=submitClaim`
    2. Run `inspectIdentity`, `inspectVehicle`, `inspectClaim` and `settle` in order
    3. Read the claim or its stage with `POST /ledger/query`
    """,
        version="1.0.0",
        lifespan=lifespan
    )
    app.include_router(ledger_router)

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with system info."""
        return {
            "system": "Car Insurance Claim Ledger",
            "version": "1.0.0",
            "status": "operational",
            "docs": "/docs"
        }

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


configure_logging(get_settings())
app = create_app()
