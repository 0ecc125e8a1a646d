#!/usr/bin/env python3
"""
Movie Recommendation Try-Out Script

Runs the recommendation service against the real Gemini API without
starting the web server or connecting to Supabase. Results are kept in an
in-memory store, so --save followed by a second lookup shows a cache hit.

Usage:
    python scripts/try_recommendations.py
    python scripts/try_recommendations.py --query "sci-fi with time travel"
    python scripts/try_recommendations.py --query "romance in paris" --save
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from movie_recommender.config import settings
from movie_recommender.exceptions import ParseError, RecommendationError
from movie_recommender.schemas.recommendations import RecommendationRecord
from movie_recommender.services import (
    GeminiModelClient,
    InMemoryResultStore,
    RecommendationService,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_record(record: RecommendationRecord, label: str) -> None:
    """Pretty print a recommendation record."""
    print("\n" + "=" * 60)
    print(f"{label}: {len(record.items)} movie(s) at {record.created_at.isoformat()}")
    print("=" * 60 + "\n")

    for i, movie in enumerate(record.items, 1):
        print(f"--- Movie #{i} ---")
        print(f"  Title:     {movie.title}")
        print(f"  Year:      {movie.year}")
        print(f"  Director:  {movie.director}")
        print(f"  Genre:     {movie.genre}")
        print(f"  Reason:    {movie.reason}")
        print()


async def run(query: str, save: bool, timeout: float) -> int:
    """Run one query, optionally save it and query again from the cache."""
    if not settings.GOOGLE_API_KEY:
        print("\nERROR: GOOGLE_API_KEY environment variable not set!")
        print("   Please set it in your .env file or export it:")
        print("   export GOOGLE_API_KEY=your-gemini-api-key")
        return 1

    store = InMemoryResultStore()
    service = RecommendationService(
        store=store,
        model_client=GeminiModelClient(
            api_key=settings.GOOGLE_API_KEY,
            model=settings.GEMINI_MODEL,
            temperature=settings.GEMINI_TEMPERATURE,
        ),
    )

    print(f"\nQuery: {query}")
    print(f"Model: {settings.GEMINI_MODEL}")

    try:
        record = await service.get(query, timeout=timeout)
    except ParseError as e:
        print(f"\nParse error: {e.message}")
        print("Raw response:")
        print(e.raw_response)
        return 1
    except RecommendationError as e:
        print(f"\n{e.kind}: {e.message}")
        return 1

    print_record(record, "FRESH")

    if save:
        await service.save(query, record.items)
        cached = await service.get(query)
        print_record(cached, "CACHED")

    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Try the movie recommendation service locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/try_recommendations.py --query "slow-burn horror set in winter"
  python scripts/try_recommendations.py --query "romance in paris" --save
        """
    )

    parser.add_argument(
        "--query", "-q",
        type=str,
        default="sci-fi with time travel",
        help="Movie preference (default: 'sci-fi with time travel')"
    )
    parser.add_argument(
        "--save", "-s",
        action="store_true",
        help="Save the result and query again to show a cache hit"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=settings.GEMINI_TIMEOUT_SECONDS,
        help="Deadline for the Gemini call in seconds"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(asyncio.run(run(args.query, args.save, args.timeout)))


if __name__ == "__main__":
    main()
