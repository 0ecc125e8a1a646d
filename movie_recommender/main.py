"""
FastAPI application entry point for the Movie Recommender backend.

This module creates the FastAPI app instance, registers all routers and
maps recommendation pipeline errors to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from movie_recommender.config import settings
from movie_recommender.exceptions import (
    ConfigurationError,
    ParseError,
    RecommendationError,
    StoreError,
    UpstreamError,
    ValidationError,
)
from movie_recommender.routes.health import router as health_router
from movie_recommender.routes.recommendations import router as recommendations_router
from movie_recommender.utils.logging import LOG_FORMAT

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=LOG_FORMAT
)

logger = logging.getLogger(__name__)

# Error kind -> (HTTP status, short title shown to clients)
_ERROR_RESPONSES = {
    ValidationError: (status.HTTP_400_BAD_REQUEST, "Bad Request"),
    ParseError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Parse Error"),
    UpstreamError: (status.HTTP_502_BAD_GATEWAY, "Upstream Error"),
    ConfigurationError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Configuration Error"),
    StoreError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
}


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (none if unset)
    - Anything else: Allows all origins for local development
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for web clients."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Movie Recommender API",
    description="Gemini-powered movie recommendations with a Supabase result cache",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Report malformed request bodies as 400 Bad Request.

    Same body shape as a ValidationError raised by the service, plus the
    pydantic details for debugging.
    """
    errors = exc.errors()
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {errors}"
    )

    message = "Invalid request body"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Bad Request",
            "kind": ValidationError.kind,
            "message": message,
            "details": jsonable_encoder(errors),
        }
    )


@app.exception_handler(RecommendationError)
async def recommendation_exception_handler(request: Request, exc: RecommendationError):
    """
    Translate pipeline failures into JSON error responses.

    ParseError responses include the model's raw text so the frontend can
    show what Gemini actually answered.
    """
    status_code, title = _ERROR_RESPONSES.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
    )

    if status_code >= 500:
        logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")

    content = {
        "error": title,
        "kind": exc.kind,
        "message": exc.message,
    }
    if isinstance(exc, ParseError):
        content["rawResponse"] = exc.raw_response

    return JSONResponse(status_code=status_code, content=content)


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(recommendations_router)

logger.info("FastAPI app initialized successfully")
