"""
Language model clients.

Each client adheres to the `BaseContextClient` interface and is selected
from the configured `Provider`.
"""

from .base import BaseContextClient, ContextResponse, ContextResult, Provider, build_prompt, parse_response
from .gemini_client import GeminiContextClient
from .mock_client import MockContextClient
from .openai_client import AnthropicContextClient, OpenAIContextClient

# Central mapping from provider to client class.
CLIENT_MAPPING: dict[Provider, type[BaseContextClient]] = {
    Provider.ANTHROPIC: AnthropicContextClient,
    Provider.OPENAI: OpenAIContextClient,
    Provider.GEMINI: GeminiContextClient,
    Provider.MOCK: MockContextClient,
}


def create_client(provider: Provider | str, custom_prompt: str | None = None) -> BaseContextClient:
    """
    Create the client for a provider.

    Raises:
        ValueError: If the provider name is unknown.
        ConfigError: If the provider's API key is missing.

    """
    return CLIENT_MAPPING[Provider(provider)](custom_prompt=custom_prompt)


__all__ = [
    "CLIENT_MAPPING",
    "AnthropicContextClient",
    "BaseContextClient",
    "ContextResponse",
    "ContextResult",
    "GeminiContextClient",
    "MockContextClient",
    "OpenAIContextClient",
    "Provider",
    "build_prompt",
    "create_client",
    "parse_response",
]
