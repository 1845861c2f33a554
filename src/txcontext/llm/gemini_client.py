"""A context client that uses Google's Gemini models through google-genai."""

import logging
import os

from google import genai
from google.genai import errors, types

from txcontext.errors import ConfigError

from .base import BaseContextClient, ContextResult, Provider

__all__ = ["GeminiContextClient"]

logger = logging.getLogger(__name__)


class GeminiContextClient(BaseContextClient):
    """
    A context client for the Gemini family of models.

    Uses 'gemini-flash-lite-latest' by default and asks for a JSON response
    through the generation config.
    """

    provider = Provider.GEMINI
    default_model = "gemini-flash-lite-latest"
    api_key_env = "GEMINI_API_KEY"

    def __init__(self, custom_prompt: str | None = None, api_key: str | None = None) -> None:
        """
        Initialize the Gemini client.

        Raises:
            ConfigError: If no API key is available.

        """
        super().__init__(custom_prompt)
        key = api_key or os.environ.get(self.api_key_env)
        if not key:
            msg = f"{self.api_key_env} environment variable is required for provider '{self.provider.value}'"
            raise ConfigError(msg)
        self.client = genai.Client(api_key=key)

    def _get_generation_config(self) -> types.GenerateContentConfig:
        """Return the generation configuration for the API call."""
        return types.GenerateContentConfig(response_mime_type="application/json", max_output_tokens=500)

    def _complete(self, prompt: str, model: str) -> str | None:
        response = self.client.models.generate_content(
            model=model,
            contents=prompt,
            config=self._get_generation_config(),
        )
        return response.text

    def _map_error(self, error: Exception) -> ContextResult:
        if isinstance(error, errors.APIError):
            if error.code == 429:  # noqa: PLR2004
                return ContextResult(description="Rate limited", error="Rate limit exceeded - try reducing concurrency")
            if error.code in (401, 403):
                return ContextResult(description="Authentication failed", error="Invalid API key")
            return ContextResult(description="API error", error=error.message or f"HTTP {error.code}")
        return super()._map_error(error)
