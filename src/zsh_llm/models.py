"""Pydantic models shared across zsh-llm.

**Wire models** -- the request body sent to the completion endpoint:
    :class:`Message`, :class:`Reasoning`, and :class:`CompletionRequest`.

**Configuration model** -- :class:`Settings`, resolved once at startup by
:func:`zsh_llm.config.resolve_settings` and passed explicitly to the client.

All models are frozen: a request or settings object never changes after it
has been built.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENDPOINT = "https://api.openai.com/v1/responses"
DEFAULT_MODEL = "gpt-5.2"
DEFAULT_TIMEOUT = 60.0
MAX_OUTPUT_TOKENS = 300


# --- Wire models ---


class Message(BaseModel):
    """One entry of the ``input`` array."""

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user"]
    content: str


class Reasoning(BaseModel):
    """Reasoning options; effort is pinned to ``"none"`` for short answers."""

    model_config = ConfigDict(frozen=True)

    effort: Literal["none"] = "none"


class CompletionRequest(BaseModel):
    """Body of a single ``POST`` to the completion endpoint.

    Sampling is fixed (temperature 0, top-p 1, a small output cap) because
    the expected answer is exactly one shell command line. Field order is
    the serialisation order, so equal requests always produce identical
    JSON bodies.

    Example::

        CompletionRequest(
            model="gpt-5.2",
            input=(
                Message(role="system", content="Return only the command..."),
                Message(role="user", content="undo last commit"),
            ),
        )
    """

    model_config = ConfigDict(frozen=True)

    model: str
    input: tuple[Message, Message]
    temperature: Literal[0] = 0
    top_p: Literal[1] = 1
    max_output_tokens: int = MAX_OUTPUT_TOKENS
    reasoning: Reasoning = Field(default_factory=Reasoning)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready body dict."""
        return self.model_dump(mode="json")


# --- Configuration ---


class Settings(BaseModel):
    """Effective configuration for one invocation.

    Built by :func:`zsh_llm.config.resolve_settings` from CLI flags and
    environment variables. ``system_prompt`` is already rendered: the
    ``$shell`` and ``$platform`` placeholders have been substituted.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    system_prompt: str
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
