"""Exception hierarchy for zsh-llm.

All exceptions inherit from :class:`ZshLlmError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`zsh_llm.exit_codes`.
The CLI command catches ``ZshLlmError``, prints the message to stderr and
exits with that code.

Subclass hierarchy::

    ZshLlmError (exit 1)
    +-- ArgumentError
    +-- MissingCredentialError
    +-- EndpointError
    +-- EndpointConnectionError
    +-- NoSuggestionError
    +-- SuggestionCommandError
"""

from __future__ import annotations

from zsh_llm.exit_codes import EXIT_GENERIC_FAILURE


class ZshLlmError(Exception):
    """Base exception for all zsh-llm errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ArgumentError(ZshLlmError):
    """Raised for missing prompt text or an unsupported ``--init`` shell."""


class MissingCredentialError(ZshLlmError):
    """Raised when no API key can be resolved from flags or environment."""


class EndpointError(ZshLlmError):
    """Raised when the endpoint answers with a non-2xx status.

    Args:
        status_code: The HTTP status code.
        message: ``error.message`` from the body, or the serialised body.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class EndpointConnectionError(ZshLlmError):
    """Raised on network-level failures (DNS, refused connection, timeout)."""


class NoSuggestionError(ZshLlmError):
    """Raised when a successful response carries no extractable text."""


class SuggestionCommandError(ZshLlmError):
    """Raised when the ``zsh-llm`` subprocess used by the widget fails.

    Args:
        returncode: Exit status of the subprocess.
        stderr: Captured diagnostics of the subprocess.
    """

    def __init__(self, returncode: int, stderr: str = ""):
        detail = stderr.strip()
        message = f"zsh-llm exited with status {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
