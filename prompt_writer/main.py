"""
FastAPI application entry point for the Prompt Writer backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_writer.config import settings
from prompt_writer.routes.health import router as health_router
from prompt_writer.routes.prompts import router as prompts_router
from prompt_writer.routes.recommend import router as recommend_router
from prompt_writer.routes.templates import router as templates_router
from prompt_writer.utils.logging import resolve_level

# Configure logging
logging.basicConfig(
    level=resolve_level(settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: only the origins listed in CORS_ORIGINS
    - Anything else: all origins, for local frontend development

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = [origin for origin in settings.CORS_ORIGINS if origin]
        if not origins:
            logger.warning("CORS_ORIGINS is empty in production. No web origins allowed.")
        else:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Prompt Writer API",
    description="Prompt template library and rule-based AI model recommendations",
    version="3.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


def _jsonable_errors(exc: RequestValidationError) -> list:
    """Strip non-serializable context (e.g. the raised ValueError) from pydantic errors."""
    errors = []
    for error in exc.errors():
        cleaned = {k: v for k, v in error.items() if k != "ctx"}
        if "ctx" in error:
            cleaned["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        errors.append(cleaned)
    return errors


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log validation errors and return them in the API error shape.

    Request bodies are not logged; template bodies can be large and private.
    """
    logger.warning(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": _jsonable_errors(exc),
        }
    )


# Configure CORS with environment-based origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(recommend_router)
app.include_router(templates_router)
app.include_router(prompts_router)

logger.info("FastAPI app initialized successfully")
