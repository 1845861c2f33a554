"""A mock context client for testing and offline runs."""

import json
import logging

from .base import BaseContextClient, Provider

__all__ = ["MockContextClient", "MockContextClientError"]

logger = logging.getLogger(__name__)


class MockContextClientError(Exception):
    """Custom exception for mock client errors."""


class MockContextClient(BaseContextClient):
    """
    A mock client that describes a key without calling any model.

    It can also be configured to fail, for testing error handling.
    """

    provider = Provider.MOCK
    default_model = "mock"

    def __init__(self, custom_prompt: str | None = None, *, return_error: bool = False) -> None:
        """
        Initialize the mock client.

        Args:
            custom_prompt: Extra instructions (ignored).
            return_error: If True, every request fails.

        """
        super().__init__(custom_prompt)
        self.return_error = return_error
        self.prompts: list[str] = []

    def _complete(self, prompt: str, model: str) -> str | None:
        _ = model
        self.prompts.append(prompt)
        if self.return_error:
            msg = "Mock client was configured to fail."
            raise MockContextClientError(msg)

        return json.dumps(
            {
                "description": f"[MOCK] Context for a string shown in the app ({len(prompt)} prompt chars).",
                "ui_element": "label",
                "tone": "neutral",
                "max_length": None,
            }
        )
