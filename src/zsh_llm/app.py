"""Typer CLI entry point for zsh-llm.

``zsh-llm [options] <command...>`` joins its positional words into a prompt,
sends it to the completion endpoint, and prints the suggested command on
stdout. ``zsh-llm --init zsh`` prints the shell integration script instead.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler and invokes the Typer app;
errors raised by zsh-llm itself are reported by the command and exit with
the error's ``exit_code``. Option-parsing errors also exit 1, through
:class:`SuggestCommand`.

See Also:
    :mod:`zsh_llm.config`: Settings resolution from flags and environment.
    :mod:`zsh_llm.output`: Output formatting initialised in :func:`main_command`.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Optional

import click
import typer
from typer.core import TyperCommand

from zsh_llm import __version__
from zsh_llm.client import CompletionClient
from zsh_llm.config import resolve_settings
from zsh_llm.exceptions import NoSuggestionError, ZshLlmError
from zsh_llm.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from zsh_llm.integration import load_integration
from zsh_llm.output import OutputManager, debug, error, print_data, set_output, spinner

app = typer.Typer(
    name="zsh-llm",
    add_completion=False,
    rich_markup_mode="rich",
)


class SuggestCommand(TyperCommand):
    """Command class that reports option-parsing errors with exit code 1.

    Click exits 2 on usage errors; zsh-llm exits 1 on every failure.
    """

    def make_context(
        self,
        info_name: Optional[str],
        args: list[str],
        parent: Optional[click.Context] = None,
        **extra: Any,
    ) -> click.Context:
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as exc:
            exc.exit_code = EXIT_GENERIC_FAILURE
            raise


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"zsh-llm {__version__}")
        raise typer.Exit()


@app.command(cls=SuggestCommand, context_settings={"help_option_names": ["-h", "--help"]})
def main_command(
    ctx: typer.Context,
    words: Optional[list[str]] = typer.Argument(
        None,
        metavar="COMMAND...",
        help="Text to rewrite into a shell command (words are joined with spaces).",
        show_default=False,
    ),
    system: Optional[str] = typer.Option(
        None, "--system", "-s", metavar="PROMPT",
        help="Custom system prompt to send before the command.",
    ),
    model: Optional[str] = typer.Option(
        None, "--model", "-m", metavar="MODEL",
        help="Override the model (default from ZSH_LLM_MODEL or gpt-5.2).",
    ),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", metavar="KEY",
        help="API key (defaults to ZSH_LLM_API_KEY or OPENAI_API_KEY).",
    ),
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", "-e", metavar="URL",
        help="API endpoint (defaults to ZSH_LLM_ENDPOINT or the OpenAI Responses API).",
    ),
    init: Optional[str] = typer.Option(
        None, "--init", "-i", metavar="SHELL",
        help="Print the integration snippet for the supported shell (zsh).",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", metavar="SECONDS",
        help="Request timeout (defaults to ZSH_LLM_TIMEOUT or 60).",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output on stderr."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Do not show the progress spinner."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Rewrite text into a single shell command using an LLM.

    Environment variables: ZSH_LLM_API_KEY, ZSH_LLM_ENDPOINT, ZSH_LLM_MODEL,
    ZSH_LLM_SYSTEM, ZSH_LLM_TIMEOUT, and ZSH_LLM_BINDKEY (read by the zsh
    integration).

    Example::

        zsh-llm "undo last commit"
        eval "$(zsh-llm --init zsh)"
    """
    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))

    try:
        if init is not None:
            print_data(load_integration(init).rstrip("\n"))
            return

        prompt = " ".join(words or []).strip()
        if not prompt:
            error("Please provide the command you want to rewrite.")
            help_text = ctx.get_help()
            if help_text:
                print_data(help_text)
            raise typer.Exit(code=EXIT_GENERIC_FAILURE)

        settings = resolve_settings(
            cli_key=key,
            cli_endpoint=endpoint,
            cli_model=model,
            cli_system=system,
            cli_timeout=timeout,
        )
        debug(f"Endpoint: {settings.endpoint}")
        debug(f"Model: {settings.model}")

        with spinner():
            with CompletionClient(settings) as client:
                suggestion = client.suggest(prompt)

        command = suggestion.strip()
        if not command:
            raise NoSuggestionError("Response does not include output text.")
    except ZshLlmError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    print_data(command)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``zsh-llm`` console script.

    Unexpected exceptions are reported on stderr and exit with
    :data:`~zsh_llm.exit_codes.EXIT_GENERIC_FAILURE` so that the shell
    widget always sees a failure and restores the buffer.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
