"""Shell integration scripts shipped with the package.

The scripts live under ``zsh_llm/share/`` as static resources and are
printed unchanged by ``zsh-llm --init SHELL``.
"""

from __future__ import annotations

from importlib.resources import files

from zsh_llm.exceptions import ArgumentError

SUPPORTED_SHELLS = ("zsh",)


def load_integration(shell: str) -> str:
    """Return the integration script for *shell*.

    Args:
        shell: Shell name as given to ``--init``.

    Raises:
        ArgumentError: If *shell* is not supported.
    """
    if shell not in SUPPORTED_SHELLS:
        raise ArgumentError(f"Supported shells: {', '.join(SUPPORTED_SHELLS)}")
    resource = files("zsh_llm") / "share" / f"zsh-llm.{shell}"
    return resource.read_text(encoding="utf-8")
