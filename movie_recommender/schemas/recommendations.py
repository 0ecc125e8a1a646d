"""
Pydantic schemas for movie recommendations.

Two groups of models live here:
- Domain models (RecommendationItem, RecommendationRecord) shared by the
  parser, the service and the result stores.
- HTTP request/response contracts for the /api endpoints. Field names follow
  the camelCase wire format used by the web frontend.
"""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============================================================================
# DOMAIN MODELS
# ============================================================================

class RecommendationItem(BaseModel):
    """
    One recommended movie.

    All fields are text. The model is lenient about completeness: a missing
    or null field becomes an empty string, numbers (e.g. year 2014) and
    booleans are coerced to text and unknown fields are dropped. Only shape
    is enforced.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str = Field(default="", examples=["Interstellar"])
    year: str = Field(default="", examples=["2014"])
    director: str = Field(default="", examples=["Christopher Nolan"])
    genre: str = Field(default="", examples=["Sci-Fi"])
    reason: str = Field(
        default="",
        description="Why this movie matches the user's preference",
        examples=["Explores time dilation and relativity"]
    )

    @field_validator("title", "year", "director", "genre", "reason", mode="before")
    @classmethod
    def _scalar_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        # JSON spelling; bool is checked before numbers since bool is an int
        if isinstance(value, bool):
            return "true" if value else "false"
        return value


class RecommendationRecord(BaseModel):
    """
    A unit of recommendation results keyed by the query that produced it.

    created_at is assigned when the record is persisted; for a fresh,
    unpersisted result it is the time of the call.
    """

    query: str
    items: List[RecommendationItem] = Field(default_factory=list)
    created_at: datetime


# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendationQueryRequest(BaseModel):
    """Request body for POST /api/recommend."""

    userInput: str = Field(
        ...,
        description="Free-text description of the movies the user wants",
        max_length=1000,
        examples=["sci-fi with time travel", "romance in paris"]
    )


class RecommendationSaveRequest(BaseModel):
    """
    Request body for POST /api/save.

    recommendations is usually the list returned by /api/recommend echoed
    back by the frontend.
    """

    userInput: str = Field(..., max_length=1000)
    recommendations: List[RecommendationItem]


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RecommendationQueryResponse(BaseModel):
    """Successful response for POST /api/recommend."""

    success: bool = True
    recommendations: List[RecommendationItem]
    timestamp: str = Field(
        ...,
        description="ISO-8601 time the recommendations were produced or saved",
        examples=["2025-01-15T10:30:00+00:00"]
    )


class RecommendationSaveResponse(BaseModel):
    """Successful response for POST /api/save."""

    success: bool = True
    message: str = "Recommendations saved successfully"
