"""
Gemini model client.

Wraps a single generate_content call to Google's Gemini model and returns the
raw text of the answer. It does not interpret the text; parsing happens in
movie_recommender.agents.recommendation.parser.

Architecture:
- API: Google Gen AI Python SDK (google-genai), async surface (client.aio)
- Model: Gemini 2.5 Flash by default (GEMINI_MODEL)
- Timeout: GEMINI_TIMEOUT_SECONDS, applied through HttpOptions

Every failure, whether transport, authentication, quota or an empty answer,
is raised as UpstreamError. A missing API key is a ConfigurationError raised
on the first call; constructing the client never fails.
"""

import logging
from typing import Optional, Protocol

from google import genai
from google.genai import errors, types

from movie_recommender.exceptions import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class ModelClient(Protocol):
    """Text-in, text-out interface used by RecommendationService."""

    async def invoke(self, prompt: str) -> str:
        ...


class GeminiModelClient:
    """Invokes Gemini with a prompt and returns the raw text output."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds
        # Created lazily on first invoke
        self._client: Optional[genai.Client] = None

        if not api_key:
            logger.warning(
                "GOOGLE_API_KEY not configured. Recommendation service will not work. "
                "Please set GOOGLE_API_KEY in your .env file."
            )

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> genai.Client:
        if self._client is not None:
            return self._client

        if not self._api_key:
            raise ConfigurationError("GOOGLE_API_KEY is not configured")

        http_options = None
        if self._timeout_seconds:
            # HttpOptions.timeout is expressed in milliseconds
            http_options = types.HttpOptions(timeout=int(self._timeout_seconds * 1000))

        self._client = genai.Client(api_key=self._api_key, http_options=http_options)
        logger.info("Gemini client initialized successfully for recommendations")
        return self._client

    def _redact(self, message: str) -> str:
        if self._api_key:
            return message.replace(self._api_key, "***")
        return message

    async def invoke(self, prompt: str) -> str:
        """
        Send the prompt to Gemini and return its text answer.

        Raises:
            ConfigurationError: If no API key is configured.
            UpstreamError: If the call fails or the answer has no text.
        """
        client = self._get_client()

        config = None
        if self._temperature is not None:
            config = types.GenerateContentConfig(temperature=self._temperature)

        logger.info(f"Calling Gemini API (model={self._model})...")

        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except errors.APIError as e:
            message = self._redact(e.message or str(e))
            logger.error(f"Gemini API error (code={e.code}): {message}")
            raise UpstreamError(message, status_code=e.code) from e
        except Exception as e:
            message = self._redact(str(e)) or type(e).__name__
            logger.error(f"Error calling Gemini API: {message}")
            raise UpstreamError(message) from e

        text = _extract_text(response)
        if not text:
            logger.error("Empty text in Gemini response")
            raise UpstreamError("No response from recommendation service.")

        return text


def _extract_text(response) -> Optional[str]:
    """
    Get the answer text from a Gemini response.

    All text parts of the first candidate are joined in order, since a
    single JSON answer may arrive split across several parts. response.text
    is only consulted when no part carries text.
    """
    if not response.candidates:
        return None

    candidate = response.candidates[0]
    if candidate.content and candidate.content.parts:
        texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
        if texts:
            return "".join(texts)

    return response.text
