"""
Logging utilities for the Movie Recommender backend.

Provides standardized logger configuration.

SECURITY RULES:
- NEVER log the Gemini API key or Supabase keys
- NEVER log full model responses at INFO level (use a short preview)

Acceptable logging:
- High-level events (e.g., "Cache hit", "Calling Gemini API")
- Query previews truncated to 50 characters
- Item counts and error kinds
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from movie_recommender.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: str, limit: int = 50) -> str:
    """Shorten user or model text for log lines."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
