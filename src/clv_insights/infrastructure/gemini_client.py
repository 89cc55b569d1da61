"""Gemini client wrapper for structured JSON generation."""

import logging

from google import genai
from google.genai import types

from clv_insights.exceptions import SchemaViolation, TransportFailure

logger = logging.getLogger(__name__)


class GeminiClient:
    """Handles Gemini structured-output calls."""

    def __init__(
        self,
        client: genai.Client,
        temperature: float = 0.4,
        max_tokens: int = 60000,
    ):
        """
        Initialize Gemini client wrapper.

        Args:
            client: google-genai client instance.
            temperature: Sampling temperature for every call.
            max_tokens: Maximum output tokens for every call.
        """
        self._client = client
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def generate_json(
        self,
        model: str,
        prompt: str,
        response_schema: types.Schema,
    ) -> str:
        """
        Generate a JSON document constrained by a response schema.

        Args:
            model: Gemini model name.
            prompt: Full instruction text.
            response_schema: Schema the output must follow.

        Returns:
            Raw JSON text of the response.

        Raises:
            TransportFailure: If the call could not complete.
            SchemaViolation: If the response carries no text.
        """
        config = types.GenerateContentConfig(
            temperature=self._temperature,
            max_output_tokens=self._max_tokens,
            response_mime_type="application/json",
            response_schema=response_schema,
            automatic_function_calling=types.AutomaticFunctionCallingConfig(
                disable=True
            ),
        )

        try:
            logger.debug("Invoking Gemini model: %s", model)
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            logger.error("Gemini call to %s failed: %s", model, e)
            raise TransportFailure(f"Gemini call to {model} failed: {e}") from e

        text = response.text
        if not text:
            logger.error("Gemini model %s returned an empty response", model)
            raise SchemaViolation(f"Empty response from {model}")

        logger.debug("Gemini response received, length: %d chars", len(text))
        return text
