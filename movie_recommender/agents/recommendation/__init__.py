"""
Movie Recommendation - single-call LLM architecture

This package contains the prompt template and the response parser for the
Gemini-based movie recommendation flow.

Architecture:
- Pattern: single generate_content call, JSON requested in the prompt
- Model: Gemini 2.5 Flash (configurable via GEMINI_MODEL)
- Output: JSON array of movies, parsed and validated from text

The service layer is in:
- movie_recommender/services/recommendation_service.py
"""

from movie_recommender.agents.recommendation.parser import (
    parse_recommendations,
    strip_code_fences,
)
from movie_recommender.agents.recommendation.prompts import (
    RECOMMENDATION_COUNT,
    RECOMMENDATION_FIELDS,
    build_recommendation_prompt,
)

__all__ = [
    "RECOMMENDATION_COUNT",
    "RECOMMENDATION_FIELDS",
    "build_recommendation_prompt",
    "parse_recommendations",
    "strip_code_fences",
]
