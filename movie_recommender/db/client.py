"""
Supabase client factory.

The recommendation cache is shared by all users, so a single client created
from the publishable key is used for the whole process. It is created once
and handed to SupabaseResultStore explicitly rather than imported as a
module global by the services.
"""

import logging

from supabase import Client, create_client

from movie_recommender.config import settings
from movie_recommender.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """
    Create a Supabase client for the recommendation table.

    Returns:
        A Supabase client authenticated with SUPABASE_PUBLISHABLE_KEY.

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_PUBLISHABLE_KEY is
            not configured.
    """
    if not settings.has_supabase():
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_PUBLISHABLE_KEY must be configured "
            "to persist recommendations."
        )

    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    logger.debug("Created Supabase client for the recommendation cache")

    return client
