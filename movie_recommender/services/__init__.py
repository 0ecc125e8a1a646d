"""
Service layer for the Movie Recommender backend.

Contains the recommendation orchestration and its two collaborators:
- RecommendationService: cache-aside lookup, Gemini call, parsing, saving
- Result stores: Supabase table or in-memory cache
- GeminiModelClient: raw text generation

Services act as the glue between routes (HTTP layer) and agents/database.
"""

from .gemini_client import GeminiModelClient, ModelClient
from .recommendation_service import RecommendationService
from .result_store import InMemoryResultStore, ResultStore, SupabaseResultStore

__all__ = [
    "GeminiModelClient",
    "ModelClient",
    "RecommendationService",
    "ResultStore",
    "SupabaseResultStore",
    "InMemoryResultStore",
]
