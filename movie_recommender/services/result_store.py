"""
Result stores for the recommendation cache.

A result store maps an exact (trimmed) query string to previously saved
recommendations. Two implementations are provided:

- SupabaseResultStore: the `recommendation` table in Supabase (production)
- InMemoryResultStore: process-local list, used when Supabase is not
  configured in development and as a test double

Stores are append-only. Saving the same query twice keeps both rows; lookups
return the oldest one so the answer for a query never changes once cached.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol, cast

from postgrest.exceptions import APIError
from supabase import Client

from movie_recommender.exceptions import StoreError
from movie_recommender.schemas.recommendations import RecommendationRecord

logger = logging.getLogger(__name__)


class ResultStore(Protocol):
    """Persistence interface used by RecommendationService."""

    async def find_by_query(self, query: str) -> Optional[RecommendationRecord]:
        ...

    async def insert(self, record: RecommendationRecord) -> RecommendationRecord:
        ...


def _row_to_record(row: Dict[str, Any]) -> RecommendationRecord:
    return RecommendationRecord.model_validate({
        "query": row.get("user_input", ""),
        "items": row.get("recommended_movies") or [],
        "created_at": row.get("created_at"),
    })


def _record_to_row(record: RecommendationRecord) -> Dict[str, Any]:
    return {
        "user_input": record.query,
        "recommended_movies": [item.model_dump() for item in record.items],
        "created_at": record.created_at.isoformat(),
    }


class SupabaseResultStore:
    """Recommendation cache backed by a Supabase table."""

    def __init__(self, supabase_client: Client, table: str = "recommendation"):
        self._client = supabase_client
        self._table = table

    async def find_by_query(self, query: str) -> Optional[RecommendationRecord]:
        """
        Fetch the oldest saved record for an exact query string.

        Returns:
            The record, or None when the query has never been saved.

        Raises:
            StoreError: If Supabase cannot be queried or returns a row that
                does not match the record shape.
        """
        try:
            result = (
                self._client.table(self._table)
                .select("*")
                .eq("user_input", query)
                .order("created_at", desc=False)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to look up cached recommendations: {e}")
            raise StoreError(f"Failed to look up cached recommendations: {e}") from e

        rows = cast(List[Dict[str, Any]], result.data or [])
        if not rows:
            return None

        try:
            return _row_to_record(rows[0])
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            logger.error(f"Cached row for query has an unexpected shape: {e}")
            raise StoreError("Cached recommendation row has an unexpected shape") from e

    async def insert(self, record: RecommendationRecord) -> RecommendationRecord:
        """
        Insert a new record.

        Raises:
            StoreError: If the insert fails or Supabase returns no row.
        """
        try:
            result = self._client.table(self._table).insert(_record_to_row(record)).execute()
        except APIError as e:
            # Constraint or policy violations reported by PostgREST
            logger.error(f"Supabase rejected recommendation insert (code={e.code}): {e.message}")
            raise StoreError(f"Failed to save recommendations: {e.message}") from e
        except Exception as e:
            logger.error(f"Failed to save recommendations: {e}")
            raise StoreError(f"Failed to save recommendations: {e}") from e

        if not result.data:
            logger.error("Supabase insert returned no data")
            raise StoreError("Failed to save recommendations: insert returned no data")

        logger.info(f"Saved {len(record.items)} recommendations to '{self._table}'")
        return record


class InMemoryResultStore:
    """Process-local recommendation cache. Contents are lost on restart."""

    def __init__(self) -> None:
        self._records: List[RecommendationRecord] = []

    async def find_by_query(self, query: str) -> Optional[RecommendationRecord]:
        for record in self._records:
            if record.query == query:
                return record.model_copy(deep=True)
        return None

    async def insert(self, record: RecommendationRecord) -> RecommendationRecord:
        self._records.append(record.model_copy(deep=True))
        return record

    def __len__(self) -> int:
        return len(self._records)
