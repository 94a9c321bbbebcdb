"""
Health check routes for the Prompt Writer backend.

Both endpoints are PUBLIC (no authentication required):
- GET /health: process is up
- GET /ping: process is up and the database answers a catalog query
"""

from fastapi import APIRouter, HTTPException, status

from prompt_writer.db.client import get_public_client
from prompt_writer.schemas.health import HealthResponse
from prompt_writer.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint (no authentication required). "
        "Returns a simple status indicator for monitoring and load balancing."
    ),
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")


@router.get(
    "/ping",
    response_model=HealthResponse,
    summary="Database connectivity check",
    description="Runs a one-row catalog query. Returns 503 when the database is unreachable.",
    status_code=200,
)
async def ping() -> HealthResponse:
    logger.debug("Ping endpoint called")

    try:
        client = get_public_client()
        client.table("ai_model").select("id").limit(1).execute()
    except Exception as e:
        logger.error(f"Database ping failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "database_unavailable",
                "details": "Database connection failed"
            }
        )

    return HealthResponse(status="ok", database="ok")
