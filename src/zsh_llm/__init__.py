"""zsh-llm -- turn the current zsh buffer into a shell command via an LLM.

The package ships a small CLI that sends a prompt to an OpenAI
Responses-API compatible endpoint and prints the suggested command, plus a
ZLE widget that swaps the current input line for that suggestion.

Typical setup::

    eval "$(zsh-llm --init zsh)"   # binds Alt-\\ in the current shell
    zsh-llm "undo last commit"     # prints: git reset --soft HEAD~1

Modules:
    app: Typer CLI entry point.
    client: HTTP client for the completion endpoint.
    extract: Suggestion extraction from loosely-typed responses.
    binding: Buffer-replacement protocol of the line-editor widget.
    config: Settings resolution from flags and environment variables.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
