"""Buffer-replacement protocol of the line-editor widget.

The zsh widget in ``share/zsh-llm.zsh`` is the production binding. This
module expresses the same state machine in Python so that any line editor
(ZLE, prompt_toolkit, a test double) can drive it through the
:class:`LineEditor` protocol:

1. snapshot the buffer text and cursor;
2. emit a blank line to make room for the spinner;
3. ask the suggester for a command built from the snapshotted text;
4. on failure, or when the suggestion is empty, put the snapshot back
   exactly; otherwise replace the text and move the cursor to its end;
5. redraw the prompt.

The suggester is any callable ``str -> str`` that raises
:class:`~zsh_llm.exceptions.ZshLlmError` on failure.
:class:`CommandSuggester` shells out to ``zsh-llm`` like the widget does;
:class:`ClientSuggester` calls the endpoint in-process.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from typing import Optional, Protocol

import httpx
from pydantic import BaseModel, ConfigDict, Field

from zsh_llm.client import CompletionClient
from zsh_llm.exceptions import SuggestionCommandError, ZshLlmError
from zsh_llm.models import Settings
from zsh_llm.output import get_output

Suggester = Callable[[str], str]


class BufferState(BaseModel):
    """Text of the editable line and the cursor offset into it."""

    model_config = ConfigDict(frozen=True)

    text: str
    cursor: int = Field(ge=0)


class LineEditor(Protocol):
    """Operations the binding needs from an interactive line editor."""

    def snapshot(self) -> BufferState: ...

    def set_buffer(self, state: BufferState) -> None: ...

    def newline(self) -> None: ...

    def reset_prompt(self) -> None: ...


class LineEditorBinding:
    """Single-shot handler that rewrites the current line via a suggester.

    The handler runs to completion on each trigger; the editor is blocked
    for the duration of the exchange, so there is never more than one
    request in flight.

    Args:
        editor: The line editor owning the buffer.
        suggest: Callable mapping the buffer text to a command.
    """

    def __init__(self, editor: LineEditor, suggest: Suggester) -> None:
        self._editor = editor
        self._suggest = suggest

    def trigger(self) -> bool:
        """Run one IDLE -> PENDING -> IDLE transition.

        Returns:
            ``False`` when the suggester failed (the buffer is left exactly
            as it was), ``True`` otherwise.
        """
        snapshot = self._editor.snapshot()
        self._editor.newline()

        try:
            result = self._suggest(snapshot.text)
        except ZshLlmError as exc:
            get_output().debug(f"Suggestion failed, restoring buffer: {exc}")
            self._editor.set_buffer(snapshot)
            self._editor.reset_prompt()
            return False

        if result:
            self._editor.set_buffer(BufferState(text=result, cursor=len(result)))
        else:
            self._editor.set_buffer(snapshot)
        self._editor.reset_prompt()
        return True


class CommandSuggester:
    """Run the ``zsh-llm`` CLI with the buffer as its only argument.

    Mirrors ``result=$(zsh-llm "$BUFFER")``: stdout becomes the suggestion
    with trailing newlines removed, and a non-zero exit is a failure.

    Args:
        argv: Command prefix; the buffer text is appended as one argument.
    """

    def __init__(self, argv: Sequence[str] = ("zsh-llm",)) -> None:
        self._argv = list(argv)

    def __call__(self, text: str) -> str:
        try:
            proc = subprocess.run(
                [*self._argv, text],
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            raise SuggestionCommandError(127, f"command not found: {self._argv[0]}") from None
        except OSError as exc:
            raise SuggestionCommandError(126, f"cannot run {self._argv[0]}: {exc}") from None
        if proc.returncode != 0:
            raise SuggestionCommandError(proc.returncode, proc.stderr)
        return proc.stdout.rstrip("\n")


class ClientSuggester:
    """Ask the completion endpoint directly, without a subprocess.

    Args:
        settings: Resolved settings for the client.
        transport: Optional httpx transport, forwarded to the client.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def __call__(self, text: str) -> str:
        with CompletionClient(self._settings, transport=self._transport) as client:
            return client.suggest(text).strip()
