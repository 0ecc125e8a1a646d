"""
FastAPI routes for movie recommendation endpoints.

Endpoints:
- POST /api/recommend: Recommendations for a free-text preference (cached)
- POST /api/save: Persist recommendations so later queries hit the cache
- GET /api/movies: Deprecated, points clients at POST /api/recommend

Failures raised by the service layer are translated to HTTP responses by the
exception handlers registered in movie_recommender.main.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from movie_recommender.dependencies import get_recommendation_service
from movie_recommender.schemas.recommendations import (
    RecommendationQueryRequest,
    RecommendationQueryResponse,
    RecommendationSaveRequest,
    RecommendationSaveResponse,
)
from movie_recommender.services.recommendation_service import RecommendationService
from movie_recommender.utils.logging import preview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recommendations"])


@router.post(
    "/recommend",
    response_model=RecommendationQueryResponse,
    status_code=status.HTTP_200_OK,
    summary="Get movie recommendations",
    description="""
    Returns 5 movie recommendations for a free-text preference.

    **Flow:**
    1. The trimmed userInput is looked up in the recommendation cache
    2. On a hit, the stored recommendations and their original timestamp
       are returned without calling Gemini
    3. On a miss, Gemini is called once and its answer is parsed

    Fresh results are NOT saved automatically; call POST /api/save.

    **Errors:**
    - 400: userInput is missing, not a string or blank
    - 500 parse_error: Gemini's answer was not a JSON array (rawResponse included)
    - 502: Gemini call failed (network, credential, rate limit)
    """
)
async def recommend_endpoint(
    request: RecommendationQueryRequest,
    service: Annotated[RecommendationService, Depends(get_recommendation_service)],
) -> RecommendationQueryResponse:
    """Cache-aside recommendation query."""
    logger.info(f"POST /api/recommend called, userInput='{preview(request.userInput)}'")

    record = await service.get(request.userInput)

    return RecommendationQueryResponse(
        success=True,
        recommendations=record.items,
        timestamp=record.created_at.isoformat(),
    )


@router.post(
    "/save",
    response_model=RecommendationSaveResponse,
    status_code=status.HTTP_200_OK,
    summary="Save movie recommendations",
    description="""
    Persists recommendations for a query. Later POST /api/recommend calls
    with the same userInput return them without calling Gemini.

    Saving the same userInput twice keeps both records; lookups return the
    oldest one.
    """
)
async def save_endpoint(
    request: RecommendationSaveRequest,
    service: Annotated[RecommendationService, Depends(get_recommendation_service)],
) -> RecommendationSaveResponse:
    """Persist recommendations for a query."""
    logger.info(
        f"POST /api/save called, userInput='{preview(request.userInput)}', "
        f"count={len(request.recommendations)}"
    )

    await service.save(request.userInput, request.recommendations)

    return RecommendationSaveResponse()


@router.get(
    "/movies",
    summary="Deprecated movie search",
    deprecated=True,
)
async def legacy_movies_endpoint(
    query: Annotated[Optional[str], Query()] = None,
) -> JSONResponse:
    """Legacy GET endpoint kept so old clients learn about POST /api/recommend."""
    if not query:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": "Query is required. Please use POST /api/recommend instead.",
            },
        )

    return JSONResponse(
        status_code=status.HTTP_301_MOVED_PERMANENTLY,
        content={
            "message": "This endpoint is deprecated. Please use POST /api/recommend",
            "newEndpoint": "/api/recommend",
            "example": {
                "method": "POST",
                "body": {"userInput": query},
            },
        },
    )
