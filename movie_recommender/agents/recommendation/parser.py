"""
Parser for raw Gemini recommendation output.

The model's answer is free text that usually, but not always, is a JSON
array. This module is the only place where that text is turned into typed
data; everything downstream works with RecommendationItem instances.

Rules:
- Fenced-code markers (```json / ```) are removed wherever they appear,
  then the text is trimmed. No bracket matching or other extraction.
- The remainder must decode as JSON and the top-level value must be an array
  of objects.
- No repair or partial recovery: a malformed answer is rejected as a whole
  with a ParseError that carries the original text.
"""

import json
import logging
import re
from typing import Any, List

from pydantic import ValidationError as PydanticValidationError

from movie_recommender.exceptions import ParseError
from movie_recommender.schemas.recommendations import RecommendationItem
from movie_recommender.utils.logging import preview

logger = logging.getLogger(__name__)

_FENCE_WITH_LANGUAGE = re.compile(r"```json", re.IGNORECASE)
_FENCE = "```"


def strip_code_fences(raw: str) -> str:
    """Remove markdown code-fence markers and surrounding whitespace."""
    text = _FENCE_WITH_LANGUAGE.sub("", raw)
    text = text.replace(_FENCE, "")
    return text.strip()


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def parse_recommendations(raw: str) -> List[RecommendationItem]:
    """
    Decode model output into a list of recommendations.

    Args:
        raw: Text exactly as returned by the model

    Returns:
        List of RecommendationItem in the order the model produced them.
        An empty JSON array yields an empty list.

    Raises:
        ParseError: If the text is not JSON, the top-level value is not an
            array, or an element is not an object of text fields.
    """
    text = strip_code_fences(raw)

    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse Gemini response as JSON: {e}")
        logger.debug(f"Raw content: {preview(raw, 500)}")
        raise ParseError("Model response is not valid JSON", raw_response=raw) from e

    if not isinstance(decoded, list):
        logger.error(f"Parsed response is not an array (got {_describe(decoded)})")
        raise ParseError(
            f"Expected a JSON array of recommendations, got {_describe(decoded)}",
            raw_response=raw,
        )

    items: List[RecommendationItem] = []
    for idx, element in enumerate(decoded):
        if not isinstance(element, dict):
            logger.error(f"Recommendation {idx} is not an object (got {_describe(element)})")
            raise ParseError(
                f"Recommendation {idx} is not an object",
                raw_response=raw,
            )
        try:
            items.append(RecommendationItem.model_validate(element))
        except PydanticValidationError as e:
            logger.error(f"Recommendation {idx} has malformed fields: {e.error_count()} error(s)")
            raise ParseError(
                f"Recommendation {idx} has malformed fields",
                raw_response=raw,
            ) from e

    logger.debug(f"Parsed {len(items)} recommendations")
    return items
