"""
Database access layer for the Movie Recommender backend.

DO NOT define table schemas or migrations here. The service expects a
`recommendation` table (name configurable with RECOMMENDATION_TABLE) with
the columns `user_input` (text), `recommended_movies` (jsonb) and
`created_at` (timestamptz).
"""

from .client import get_supabase_client

__all__ = ["get_supabase_client"]
