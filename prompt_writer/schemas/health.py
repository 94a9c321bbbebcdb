"""
Health check endpoint schemas.

Both endpoints are PUBLIC (no authentication required).
"""

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health and GET /ping.

    Used by load balancers, monitoring systems, and deployment checks.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API",
        examples=["ok"]
    )
    database: Optional[str] = Field(
        default=None,
        description="Database connectivity ('ok' on /ping, omitted on /health)",
        examples=["ok"]
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "example": {
                "status": "ok",
                "database": "ok"
            }
        }
