"""
FastAPI dependency functions for the service layer.

The recommendation service and its collaborators (Supabase client, Gemini
client) are built once per process and handed to routes through
get_recommendation_service. Tests replace it via app.dependency_overrides.
"""

import logging
from typing import Optional

from movie_recommender.config import settings
from movie_recommender.db.client import get_supabase_client
from movie_recommender.services.gemini_client import GeminiModelClient
from movie_recommender.services.recommendation_service import RecommendationService
from movie_recommender.services.result_store import (
    InMemoryResultStore,
    ResultStore,
    SupabaseResultStore,
)

logger = logging.getLogger(__name__)

_recommendation_service: Optional[RecommendationService] = None


def build_recommendation_service() -> RecommendationService:
    """
    Wire a RecommendationService from application settings.

    Falls back to an in-memory store when Supabase is not configured, so the
    API can be tried locally with only a Gemini key.
    """
    model_client = GeminiModelClient(
        api_key=settings.GOOGLE_API_KEY,
        model=settings.GEMINI_MODEL,
        temperature=settings.GEMINI_TEMPERATURE,
        timeout_seconds=settings.GEMINI_TIMEOUT_SECONDS,
    )

    store: ResultStore
    if settings.has_supabase():
        store = SupabaseResultStore(get_supabase_client(), table=settings.RECOMMENDATION_TABLE)
    else:
        logger.warning(
            "Supabase is not configured; saved recommendations are kept in memory "
            "and lost on restart."
        )
        store = InMemoryResultStore()

    return RecommendationService(
        store=store,
        model_client=model_client,
        coalesce_misses=settings.RECOMMENDATION_COALESCE_MISSES,
    )


def get_recommendation_service() -> RecommendationService:
    """Get or create the process-wide RecommendationService."""
    global _recommendation_service

    if _recommendation_service is None:
        _recommendation_service = build_recommendation_service()

    return _recommendation_service
