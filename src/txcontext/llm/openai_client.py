"""Context clients for OpenAI and for Anthropic's OpenAI-compatible endpoint."""

import functools
import logging
import os
import time
from collections.abc import Callable
from typing import Any, Final, TypeVar

import openai

from txcontext.errors import ConfigError

from .base import BaseContextClient, ContextResult, Provider

__all__ = ["AnthropicContextClient", "OpenAIContextClient", "rate_limit_retry"]

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

ANTHROPIC_BASE_URL: Final[str] = "https://api.anthropic.com/v1/"
MAX_OUTPUT_TOKENS: Final[int] = 500
REQUEST_TIMEOUT_SECONDS: Final[float] = 60.0


def rate_limit_retry(max_retries: int = 3, base_delay: float = 2.0) -> Callable[[F], F]:
    """Retry the wrapped call with exponential backoff while the provider rate-limits it."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except openai.RateLimitError:
                    if attempt == max_retries - 1:
                        logger.warning("Max retries exceeded for rate limit.")
                        raise
                    delay = base_delay * (2**attempt)
                    logger.warning("Rate limit exceeded. Retrying in %.1f seconds...", delay)
                    time.sleep(delay)
            return None

        return wrapper  # type: ignore[return-value]

    return decorator


class OpenAIContextClient(BaseContextClient):
    """A context client for the OpenAI chat completions API."""

    provider = Provider.OPENAI
    default_model = "gpt-4o-mini"
    api_key_env = "OPENAI_API_KEY"
    base_url: str | None = None

    def __init__(self, custom_prompt: str | None = None, api_key: str | None = None) -> None:
        """
        Initialize the client.

        Args:
            custom_prompt: Extra instructions appended to every prompt.
            api_key: API key. Read from the provider's environment variable when omitted.

        Raises:
            ConfigError: If no API key is available.

        """
        super().__init__(custom_prompt)
        key = api_key or os.environ.get(self.api_key_env)
        if not key:
            msg = f"{self.api_key_env} environment variable is required for provider '{self.provider.value}'"
            raise ConfigError(msg)
        self.client = openai.OpenAI(api_key=key, base_url=self.base_url, timeout=REQUEST_TIMEOUT_SECONDS)
        logger.debug("Initialized %s with default model '%s'.", self.__class__.__name__, self.default_model)

    @rate_limit_retry()
    def _complete(self, prompt: str, model: str) -> str | None:
        response = self.client.chat.completions.create(
            model=model,
            max_tokens=MAX_OUTPUT_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    def _map_error(self, error: Exception) -> ContextResult:
        if isinstance(error, openai.RateLimitError):
            return ContextResult(description="Rate limited", error="Rate limit exceeded - try reducing concurrency")
        if isinstance(error, openai.AuthenticationError):
            return ContextResult(description="Authentication failed", error="Invalid API key")
        if isinstance(error, openai.APIStatusError):
            return ContextResult(description="API error", error=error.message or f"HTTP {error.status_code}")
        return super()._map_error(error)


class AnthropicContextClient(OpenAIContextClient):
    """A context client for Claude models, called through Anthropic's OpenAI SDK compatibility layer."""

    provider = Provider.ANTHROPIC
    default_model = "claude-sonnet-4-20250514"
    api_key_env = "ANTHROPIC_API_KEY"
    base_url = ANTHROPIC_BASE_URL
