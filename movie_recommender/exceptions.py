"""
Error taxonomy for the recommendation pipeline.

Every failure of the core is raised as one of these exceptions and carries a
human-readable message. Translation to HTTP status codes happens only in
movie_recommender.main.
"""

from typing import Optional


class RecommendationError(Exception):
    """Base class for all recommendation pipeline failures."""

    kind = "recommendation_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RecommendationError):
    """Caller input is malformed (empty query, non-sequence items)."""

    kind = "validation_error"


class UpstreamError(RecommendationError):
    """The model backend is unreachable, rejected the credential or is rate limited."""

    kind = "upstream_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(RecommendationError):
    """
    Model output could not be decoded into a list of recommendations.

    raw_response holds the untouched model text; it is the only record of
    what the model actually produced.
    """

    kind = "parse_error"

    def __init__(self, message: str, raw_response: str):
        super().__init__(message)
        self.raw_response = raw_response


class StoreError(RecommendationError):
    """The persistence layer is unavailable or rejected a write."""

    kind = "store_error"


class ConfigurationError(RecommendationError):
    """A required credential or setting is absent."""

    kind = "configuration_error"
