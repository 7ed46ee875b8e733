"""Settings resolution with explicit precedence chains.

Every setting is resolved once at startup, then frozen into a
:class:`~zsh_llm.models.Settings` that the client receives explicitly.
For each value the first non-empty source wins:

* **API key** -- ``--key``, ``ZSH_LLM_API_KEY``, ``OPENAI_API_KEY``,
  ``OPENAI_API_KEY_SECRET``. There is no default.
* **Endpoint** -- ``--endpoint``, ``ZSH_LLM_ENDPOINT``,
  ``OPENAI_API_ENDPOINT``, ``OPENAI_API_BASE``, then
  :data:`~zsh_llm.models.DEFAULT_ENDPOINT`.
* **Model** -- ``--model``, ``ZSH_LLM_MODEL``, then
  :data:`~zsh_llm.models.DEFAULT_MODEL`.
* **System prompt** -- ``--system``, ``ZSH_LLM_SYSTEM``, then
  :data:`DEFAULT_SYSTEM_PROMPT_TEMPLATE` rendered for the current shell.
* **Timeout** -- ``--timeout``, ``ZSH_LLM_TIMEOUT``, then
  :data:`~zsh_llm.models.DEFAULT_TIMEOUT`.

The key-binding sequence (``ZSH_LLM_BINDKEY``) is read by the zsh script
itself when it is sourced, not here.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from typing import Optional

from zsh_llm.exceptions import ArgumentError, MissingCredentialError
from zsh_llm.models import DEFAULT_ENDPOINT, DEFAULT_MODEL, DEFAULT_TIMEOUT, Settings

DEFAULT_SYSTEM_PROMPT_TEMPLATE = (
    "Return only the command to be executed as a raw string, no markdown, "
    "no fenced code, no explanation. The shell is $shell on $platform."
)

API_KEY_ENV_VARS = ("ZSH_LLM_API_KEY", "OPENAI_API_KEY", "OPENAI_API_KEY_SECRET")
ENDPOINT_ENV_VARS = ("ZSH_LLM_ENDPOINT", "OPENAI_API_ENDPOINT", "OPENAI_API_BASE")
MODEL_ENV_VARS = ("ZSH_LLM_MODEL",)
SYSTEM_ENV_VARS = ("ZSH_LLM_SYSTEM",)
TIMEOUT_ENV_VARS = ("ZSH_LLM_TIMEOUT",)


def _first_set(
    cli_value: Optional[str],
    env_vars: tuple[str, ...],
    environ: Mapping[str, str],
) -> Optional[str]:
    """Return the CLI value or the first non-empty env var, else ``None``."""
    if cli_value:
        return cli_value
    for name in env_vars:
        value = environ.get(name)
        if value:
            return value
    return None


def render_system_prompt(template: str, shell: str, platform: str) -> str:
    """Substitute the first ``$shell`` and ``$platform`` placeholders.

    Args:
        template: Instruction text, possibly containing placeholders.
        shell: Shell name, e.g. ``"zsh"``.
        platform: Platform identifier, e.g. ``"linux"`` or ``"darwin"``.

    Returns:
        The rendered instruction.
    """
    return template.replace("$shell", shell, 1).replace("$platform", platform, 1)


def resolve_api_key(
    cli_key: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Resolve the API key.

    Raises:
        MissingCredentialError: If neither the flag nor any env var is set.
    """
    env = os.environ if environ is None else environ
    key = _first_set(cli_key, API_KEY_ENV_VARS, env)
    if not key:
        raise MissingCredentialError(
            "Missing API key; set ZSH_LLM_API_KEY, OPENAI_API_KEY, or pass --key."
        )
    return key


def resolve_endpoint(
    cli_endpoint: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Resolve the endpoint URL, falling back to the OpenAI Responses API."""
    env = os.environ if environ is None else environ
    return _first_set(cli_endpoint, ENDPOINT_ENV_VARS, env) or DEFAULT_ENDPOINT


def resolve_model(
    cli_model: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Resolve the model name."""
    env = os.environ if environ is None else environ
    return _first_set(cli_model, MODEL_ENV_VARS, env) or DEFAULT_MODEL


def resolve_system_prompt(
    cli_system: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> str:
    """Resolve the system instruction.

    An explicit prompt (flag or ``ZSH_LLM_SYSTEM``) is used verbatim. The
    default template is rendered with the basename of ``$SHELL`` (``sh``
    when unset) and the platform identifier (``sys.platform``).
    """
    env = os.environ if environ is None else environ
    explicit = _first_set(cli_system, SYSTEM_ENV_VARS, env)
    if explicit:
        return explicit
    shell = os.path.basename(env.get("SHELL") or "sh")
    return render_system_prompt(
        DEFAULT_SYSTEM_PROMPT_TEMPLATE, shell, platform or sys.platform
    )


def resolve_timeout(
    cli_timeout: Optional[float] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> float:
    """Resolve the request timeout in seconds.

    Raises:
        ArgumentError: If the flag or ``ZSH_LLM_TIMEOUT`` is not a positive
            number.
    """
    if cli_timeout is not None:
        if cli_timeout <= 0:
            raise ArgumentError(f"Timeout must be positive, got {cli_timeout}")
        return cli_timeout
    env = os.environ if environ is None else environ
    raw = _first_set(None, TIMEOUT_ENV_VARS, env)
    if raw is None:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ArgumentError(f"Invalid ZSH_LLM_TIMEOUT: {raw!r}") from None
    if value <= 0:
        raise ArgumentError(f"Invalid ZSH_LLM_TIMEOUT: {raw!r}")
    return value


def resolve_settings(
    cli_key: Optional[str] = None,
    cli_endpoint: Optional[str] = None,
    cli_model: Optional[str] = None,
    cli_system: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve every setting with full precedence and freeze the result.

    Args:
        cli_key: ``--key`` value.
        cli_endpoint: ``--endpoint`` value.
        cli_model: ``--model`` value.
        cli_system: ``--system`` value.
        cli_timeout: ``--timeout`` value.
        environ: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        The effective :class:`~zsh_llm.models.Settings`.

    Raises:
        MissingCredentialError: If no API key is available.
        ArgumentError: If the timeout is invalid.
    """
    env = os.environ if environ is None else environ
    return Settings(
        api_key=resolve_api_key(cli_key, env),
        endpoint=resolve_endpoint(cli_endpoint, env),
        model=resolve_model(cli_model, env),
        system_prompt=resolve_system_prompt(cli_system, env),
        timeout=resolve_timeout(cli_timeout, env),
    )
