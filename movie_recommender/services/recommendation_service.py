"""
Recommendation Service - cache-aside movie recommendations with Gemini

This service turns a free-text movie preference into a list of structured
recommendations.

Flow for get(query):
1. Validate and trim the query
2. Look the query up in the result store; a hit is returned as-is and no
   model call is made
3. On a miss, build the prompt and call Gemini once (no retries)
4. Parse the raw answer into RecommendationItem objects
5. Return a fresh record; nothing is written to the store

Persistence is a separate, explicit step: save(query, items) appends a new
record, which later get() calls will find.

Concurrency:
- By default two concurrent get() calls for the same unseen query both miss
  the store and both call the model.
- With coalesce_misses=True concurrent misses for the same query share one
  in-flight model call and receive the same result or the same error.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from movie_recommender.agents.recommendation import (
    build_recommendation_prompt,
    parse_recommendations,
)
from movie_recommender.exceptions import ParseError, UpstreamError, ValidationError
from movie_recommender.schemas.recommendations import (
    RecommendationItem,
    RecommendationRecord,
)
from movie_recommender.services.gemini_client import ModelClient
from movie_recommender.services.result_store import ResultStore
from movie_recommender.utils.logging import preview

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_query(query: Any) -> str:
    """
    Trim a caller-supplied query.

    Raises:
        ValidationError: If the query is not a string or is blank.
    """
    if not isinstance(query, str):
        raise ValidationError("userInput is required and must be a string")

    normalized = query.strip()
    if not normalized:
        raise ValidationError("userInput cannot be empty")

    return normalized


def coerce_items(items: Any) -> List[RecommendationItem]:
    """
    Check that caller-supplied items are a sequence of record-shaped values.

    Field completeness is not checked; missing fields become empty strings.

    Raises:
        ValidationError: If items is not a list/tuple, or an element is not
            a mapping or RecommendationItem.
    """
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise ValidationError("recommendations must be a list of movie objects")

    coerced: List[RecommendationItem] = []
    for idx, item in enumerate(items):
        if isinstance(item, RecommendationItem):
            coerced.append(item)
            continue
        if not isinstance(item, Mapping):
            raise ValidationError(f"recommendations[{idx}] must be an object")
        try:
            coerced.append(RecommendationItem.model_validate(dict(item)))
        except PydanticValidationError as e:
            raise ValidationError(f"recommendations[{idx}] has malformed fields") from e

    return coerced


class RecommendationService:
    """
    Orchestrates the recommendation cache and the model.

    Args:
        store: Result store used for lookups and saves
        model_client: Client that turns a prompt into raw model text
        coalesce_misses: Share one model call between concurrent misses
            for the same query
        clock: Returns the current time; defaults to timezone-aware UTC now
    """

    def __init__(
        self,
        store: ResultStore,
        model_client: ModelClient,
        coalesce_misses: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._model_client = model_client
        self._coalesce_misses = coalesce_misses
        self._clock = clock
        self._inflight: Dict[str, "asyncio.Future[RecommendationRecord]"] = {}

    async def get(self, query: Any, timeout: Optional[float] = None) -> RecommendationRecord:
        """
        Return recommendations for a query, from the store or from Gemini.

        Args:
            query: Free-text movie preference
            timeout: Optional upper bound in seconds for the model call

        Returns:
            The cached record on a hit, otherwise a fresh unpersisted record
            whose created_at is the time of this call.

        Raises:
            ValidationError: Blank or non-string query
            StoreError: The store lookup failed
            ConfigurationError: The model credential is missing
            UpstreamError: The model call failed or timed out
            ParseError: The model answer is not a JSON array of movies
        """
        normalized = normalize_query(query)
        logger.info(f"get recommendations called, query='{preview(normalized)}'")

        cached = await self._store.find_by_query(normalized)
        if cached is not None:
            logger.info(f"Cache hit: returning {len(cached.items)} stored recommendations")
            return cached

        logger.info("Cache miss: querying Gemini")

        if not self._coalesce_misses:
            return await self._with_deadline(self._generate(normalized), timeout)

        pending = self._inflight.get(normalized)
        if pending is None:
            pending = asyncio.ensure_future(self._generate(normalized))
            self._inflight[normalized] = pending
            pending.add_done_callback(lambda done: self._finish_inflight(normalized, done))
        else:
            logger.info("Joining in-flight Gemini call for the same query")

        # Each caller applies its own deadline; the shared call is not bounded
        # by any one of them and survives a caller's cancellation
        return await self._with_deadline(asyncio.shield(pending), timeout)

    def _finish_inflight(self, query: str, done: "asyncio.Future[RecommendationRecord]") -> None:
        self._inflight.pop(query, None)
        # Mark the outcome as retrieved when every caller gave up waiting
        if not done.cancelled():
            done.exception()

    async def _with_deadline(
        self,
        awaitable: Awaitable[RecommendationRecord],
        timeout: Optional[float],
    ) -> RecommendationRecord:
        if timeout is None:
            return await awaitable

        try:
            return await asyncio.wait_for(awaitable, timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini call exceeded {timeout}s deadline")
            raise UpstreamError(f"Model call timed out after {timeout} seconds") from e

    async def _generate(self, query: str) -> RecommendationRecord:
        prompt = build_recommendation_prompt(query)
        raw = await self._model_client.invoke(prompt)

        try:
            items = parse_recommendations(raw)
        except ParseError:
            logger.error(f"Unusable Gemini response: '{preview(raw, 200)}'")
            raise

        logger.info(f"Returning {len(items)} fresh recommendations")
        return RecommendationRecord(query=query, items=items, created_at=self._clock())

    async def save(self, query: Any, items: Any) -> RecommendationRecord:
        """
        Persist recommendations for a query.

        Append-only: saving an already cached query adds another record and
        lookups keep returning the oldest one.

        Returns:
            The record that was written, with created_at set to now.

        Raises:
            ValidationError: Blank query or items that are not a sequence of
                movie objects
            StoreError: The insert failed
        """
        normalized = normalize_query(query)
        coerced = coerce_items(items)

        record = RecommendationRecord(query=normalized, items=coerced, created_at=self._clock())
        logger.info(f"Saving {len(coerced)} recommendations for query='{preview(normalized)}'")

        return await self._store.insert(record)
