"""Defines the base class and shared prompt handling for all LLM clients."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from pathlib import PurePath
from typing import Final

import regex
from pydantic import BaseModel, ConfigDict, ValidationError

from txcontext.types import Match

__all__ = [
    "BaseContextClient",
    "ContextResponse",
    "ContextResult",
    "Provider",
    "build_prompt",
    "detect_prompt_platform",
    "extract_json",
    "format_matches",
    "parse_response",
]

logger = logging.getLogger(__name__)


class Provider(str, Enum):
    """Enumeration of the supported LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"
    MOCK = "mock"


class ContextResult(BaseModel):
    """The context a language model produced for one key."""

    model_config = ConfigDict(frozen=True)

    description: str
    ui_element: str | None = None
    tone: str | None = None
    max_length: int | None = None
    error: str | None = None


class ContextResponse(BaseModel):
    """Schema of the JSON object the model is asked to return."""

    model_config = ConfigDict(extra="ignore")

    description: str = "No description provided"
    ui_element: str | None = None
    tone: str | None = None
    max_length: int | None = None


PROMPT_TEMPLATE: Final[str] = """You are analyzing a localized string from a {platform} mobile app to help translators understand its context.

## Translation Key
`{key}`

## Original Text
"{text}"

## Code Usage
{matches}

## Task
Analyze how this string is used in the mobile app code and provide context for translators.

Focus on:
1. **Where it appears**: What screen or view displays this text?
2. **UI element type**: Is it a button label, navigation title, alert message, placeholder, etc.?
3. **User action**: What action triggers this text or what happens when the user interacts with it?
4. **Constraints**: Are there any length constraints (e.g., button width, navigation bar)?

Write a concise context description (1-2 sentences) that helps a translator understand:
- The purpose of this text in the app
- The UI context where it appears
- Any important considerations for translation

Respond with ONLY a JSON object (no markdown, no explanation):
{{
  "description": "Concise context for translators (1-2 sentences)",
  "ui_element": "button|label|title|alert|toast|placeholder|navigation|menu|tab|error|confirmation|other",
  "tone": "formal|casual|urgent|friendly|technical|neutral",
  "max_length": null or number if there's an apparent character limit
}}
"""

_IOS_SUFFIXES: Final[frozenset[str]] = frozenset({".swift", ".m", ".mm"})
_ANDROID_SUFFIXES: Final[frozenset[str]] = frozenset({".kt", ".java"})

_FENCED_JSON_PATTERN: Final = regex.compile(r"```(?:json)?\s*(\{[^`]+\})\s*```", regex.DOTALL)
_RAW_JSON_PATTERN: Final = regex.compile(r"\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\}", regex.DOTALL)


def detect_prompt_platform(matches: Sequence[Match]) -> str:
    """Return the platform name shown in the prompt, judged by the match file suffixes."""
    suffixes = {PurePath(m.file).suffix.lower() for m in matches}
    if suffixes & _IOS_SUFFIXES:
        return "iOS"
    if suffixes & _ANDROID_SUFFIXES:
        return "Android"
    return "mobile"


def format_matches(matches: Sequence[Match]) -> str:
    """Render matches as numbered sections, each with its context in a code block."""
    blocks = [f"### Match {i}: {m.file}:{m.line}\n```\n{m.context}\n```\n" for i, m in enumerate(matches, start=1)]
    return "\n".join(blocks)


def build_prompt(key: str, text: str, matches: Sequence[Match], custom_prompt: str | None = None) -> str:
    """
    Build the user prompt for one key.

    Args:
        key: The translation key.
        text: The source-language text.
        matches: The usage matches to show the model.
        custom_prompt: Extra project-specific instructions appended to the prompt.

    Returns:
        The complete prompt.

    """
    prompt = PROMPT_TEMPLATE.format(
        platform=detect_prompt_platform(matches),
        key=key,
        text=text,
        matches=format_matches(matches),
    )
    if custom_prompt and custom_prompt.strip():
        prompt += f"\n## Additional Instructions\n{custom_prompt.strip()}\n"
    return prompt


def extract_json(text: str) -> str | None:
    """Find a JSON object in a model response, fenced or raw."""
    if "```" in text:
        match = _FENCED_JSON_PATTERN.search(text)
        if match:
            return match.group(1)
    match = _RAW_JSON_PATTERN.search(text)
    return match.group(0) if match else None


def parse_response(text: str | None) -> ContextResult:
    """
    Turn a raw model response into a ContextResult.

    A response without any JSON object is taken as the description itself.
    A JSON object that fails to parse or validate keeps the raw text as the
    description and records the problem in `error`.
    """
    if not text or not text.strip():
        return ContextResult(description="Failed to parse response", error="Empty response")

    json_text = extract_json(text)
    if json_text is None:
        return ContextResult(description=text.strip())

    try:
        data = ContextResponse.model_validate_json(json_text)
    except ValidationError as e:
        return ContextResult(description=text.strip(), error=f"JSON parse error: {_first_error(e)}")

    return ContextResult(
        description=data.description,
        ui_element=data.ui_element,
        tone=data.tone,
        max_length=data.max_length,
    )


def _first_error(error: ValidationError) -> str:
    """Return a short, single-line message for a validation failure."""
    details = error.errors()
    if not details:
        return str(error)
    return details[0].get("msg", str(error))


class BaseContextClient(ABC):
    """
    Abstract base class for all LLM client implementations.

    Subclasses only implement `_complete`. Everything else, including mapping
    failures to an `error` result, happens here so that `generate_context`
    never raises.
    """

    provider: Provider
    default_model: str = ""

    def __init__(self, custom_prompt: str | None = None) -> None:
        """
        Initialize the client.

        Args:
            custom_prompt: Extra instructions appended to every prompt.

        """
        self.custom_prompt = custom_prompt

    @abstractmethod
    def _complete(self, prompt: str, model: str) -> str | None:
        """
        Send one prompt to the model and return its raw text reply.

        Args:
            prompt: The complete user prompt.
            model: The model name to use.

        Returns:
            The text of the model's reply.

        """
        raise NotImplementedError

    def _map_error(self, error: Exception) -> ContextResult:
        """Map a provider exception to a result. Subclasses refine this for their SDK."""
        return ContextResult(description="API request failed", error=str(error) or error.__class__.__name__)

    def generate_context(self, key: str, text: str, matches: Sequence[Match], model: str | None = None) -> ContextResult:
        """
        Ask the model to describe how a key is used.

        Args:
            key: The translation key.
            text: The source-language text.
            matches: Usage matches, already truncated by the caller.
            model: Model override. Falls back to the client's default model.

        Returns:
            The generated context. Failures are reported through `error`.

        """
        model_name = model or self.default_model
        prompt = build_prompt(key, text, matches, self.custom_prompt)
        logger.debug("[%s] Requesting context for '%s' with model '%s'.", self.provider.value, key, model_name)

        try:
            reply = self._complete(prompt, model_name)
        except Exception as e:
            logger.debug("[%s] Request for '%s' failed: %s", self.provider.value, key, e)
            return self._map_error(e)

        result = parse_response(reply)
        if result.error:
            logger.debug("[%s] Could not parse reply for '%s': %s", self.provider.value, key, result.error)
        return result
