"""
Lunch Order Governance - FastAPI Application

Endpoints:
  GET  /                   service banner
  GET  /api/health         liveness check
  POST /api/pipeline/run   employee -> HR -> finance -> manager review
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lunch_governance.advisory_client import AdvisoryClient
from lunch_governance.budget import BudgetPolicy
from lunch_governance.config import Settings, get_settings, resolve_log_level
from lunch_governance.exceptions import ClientInputError
from lunch_governance.routers import pipeline_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Lunch Order Governance"
SERVICE_VERSION = "0.1.0"


REQUIRED_ARRAY_FIELDS = ("employees", "lunchMenu")


def client_input_error_from_validation(exc: RequestValidationError) -> ClientInputError:
    """Turn a pydantic body validation failure into the 400 contract message."""
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return ClientInputError("Invalid input: request body is not valid JSON")
        loc = error.get("loc", ())
        if len(loc) >= 2 and loc[0] == "body" and loc[1] in REQUIRED_ARRAY_FIELDS:
            return ClientInputError(f"Invalid input: {loc[1]} array is required")
    return ClientInputError("Invalid input: request body must be a JSON object with employees and lunchMenu arrays")


def create_app(
    settings: Optional[Settings] = None,
    advisory_client: Optional[AdvisoryClient] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Process settings (loaded from the environment if None)
        advisory_client: Advisory client override (built from settings if None)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for startup and shutdown.
        """
        # Startup
        resolved = settings or get_settings()
        logging.getLogger().setLevel(resolve_log_level(resolved.log_level))
        logger.info(f"Initializing {SERVICE_NAME}...")

        app.state.settings = resolved
        app.state.budget_policy = BudgetPolicy.from_settings(resolved)
        app.state.advisory_client = advisory_client or AdvisoryClient.from_settings(resolved)

        if app.state.advisory_client.is_configured:
            logger.info(f"Advisory service configured (agent={resolved.advisory_agent_id})")
        else:
            logger.warning("Advisory configuration missing, every run uses rule-based assessment")

        logger.info(
            f"Budget policy: ${app.state.budget_policy.per_person_rate} per person, "
            f"planned headcount {app.state.budget_policy.planned_headcount}"
        )

        yield

        # Shutdown
        logger.info(f"Shutting down {SERVICE_NAME}...")

    app = FastAPI(
        title=SERVICE_NAME,
        description="Hybrid AI + rule-based policy review for group lunch orders",
        version=SERVICE_VERSION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(pipeline_router)

    @app.get("/")
    async def root():
        """Service banner."""
        return {
            "service": SERVICE_NAME,
            "status": "operational",
            "version": SERVICE_VERSION,
            "endpoints": {
                "health": "/api/health",
                "pipeline": "/api/pipeline/run"
            }
        }

    @app.get("/api/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.exception_handler(ClientInputError)
    async def client_input_error_handler(request: Request, exc: ClientInputError):
        logger.warning(f"Rejected request to {request.url.path}: {exc.message}")
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return await client_input_error_handler(request, client_input_error_from_validation(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler - generic 500, details only in the log."""
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": "The service encountered an unexpected error but remains operational"
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
