"""Shared test fixtures for zsh-llm.

Provides reusable fixtures for isolating the environment, managing output
state, building settings, and running the CLI. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import pytest

from zsh_llm.models import Settings
from zsh_llm.output import OutputManager, reset_output, set_output


ENV_VARS = (
    "ZSH_LLM_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_API_KEY_SECRET",
    "ZSH_LLM_ENDPOINT",
    "OPENAI_API_ENDPOINT",
    "OPENAI_API_BASE",
    "ZSH_LLM_MODEL",
    "ZSH_LLM_SYSTEM",
    "ZSH_LLM_TIMEOUT",
)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager's Rich console holds a reference to sys.stderr from
    creation time. When Typer's CliRunner swaps the streams and the test
    finishes, that reference goes stale. Resetting forces a fresh manager
    on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable zsh-llm reads so the host never leaks in."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SHELL", "/bin/zsh")
    monkeypatch.setenv("NO_COLOR", "1")
    return monkeypatch


# ---------------------------------------------------------------------------
# Settings and output
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a fake endpoint."""
    return Settings(
        api_key="sk-test",
        endpoint="https://llm.example.com/v1/responses",
        model="test-model",
        system_prompt="Return only the command.",
        timeout=5,
    )


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless output manager."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
