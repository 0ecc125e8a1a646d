"""
Pytest configuration for Movie Recommender backend tests.

Sets up test environment and global fixtures.
"""
import os
from datetime import datetime, timezone
from typing import List, Optional

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from movie_recommender.schemas.recommendations import (  # noqa: E402
    RecommendationItem,
    RecommendationRecord,
)
from movie_recommender.services.recommendation_service import RecommendationService  # noqa: E402
from movie_recommender.services.result_store import InMemoryResultStore  # noqa: E402


INTERSTELLAR = {
    "title": "Interstellar",
    "year": "2014",
    "director": "Christopher Nolan",
    "genre": "Sci-Fi",
    "reason": "time-related themes",
}


class CountingModelClient:
    """ModelClient stand-in that records every prompt it receives."""

    def __init__(self, response: str = "[]", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.prompts: List[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_model_client():
    """Factory for call-counting model clients."""
    return CountingModelClient


@pytest.fixture
def interstellar():
    return dict(INTERSTELLAR)


@pytest.fixture
def fixed_now():
    return datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemoryResultStore()


@pytest.fixture
def model_client():
    return CountingModelClient(
        response='```json\n[{"title":"Interstellar","year":"2014","director":"Christopher Nolan",'
                 '"genre":"Sci-Fi","reason":"time-related themes"}]\n```'
    )


@pytest.fixture
def service(store, model_client, fixed_now):
    return RecommendationService(store=store, model_client=model_client, clock=lambda: fixed_now)


@pytest.fixture
def cached_record():
    """A record saved earlier for 'romance in paris'."""
    return RecommendationRecord(
        query="romance in paris",
        items=[
            RecommendationItem(
                title="Amélie",
                year="2001",
                director="Jean-Pierre Jeunet",
                genre="Romance",
                reason="Whimsical love story in Montmartre",
            ),
            RecommendationItem(
                title="Before Sunset",
                year="2004",
                director="Richard Linklater",
                genre="Romance",
                reason="A reunion walking through Paris",
            ),
        ],
        created_at=datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc),
    )
