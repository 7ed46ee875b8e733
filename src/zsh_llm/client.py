"""HTTP client for the completion endpoint.

:class:`CompletionClient` wraps :class:`httpx.Client` and performs exactly
one ``POST`` per suggestion:

- **Request construction** -- :func:`build_request` pairs the system
  instruction with the user's buffer text and pins the sampling parameters.
- **Auth injection** -- ``Authorization: Bearer <key>`` on every request.
- **Error mapping** -- non-2xx statuses become
  :class:`~zsh_llm.exceptions.EndpointError`, transport failures become
  :class:`~zsh_llm.exceptions.EndpointConnectionError`.
- **Extraction** -- the decoded body goes through
  :func:`~zsh_llm.extract.extract_suggestion`.

There is no retry, no streaming and no caching: a failed call is reported
once and the shell widget restores the buffer.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from zsh_llm.exceptions import EndpointConnectionError, EndpointError, NoSuggestionError
from zsh_llm.extract import extract_suggestion
from zsh_llm.models import CompletionRequest, Message, Settings
from zsh_llm.output import get_output


def build_request(prompt: str, system_prompt: str, model: str) -> CompletionRequest:
    """Build the request body for one suggestion.

    Args:
        prompt: The buffer text, sent verbatim as the user message.
        system_prompt: The rendered system instruction.
        model: Model identifier.

    Returns:
        A frozen :class:`~zsh_llm.models.CompletionRequest`.
    """
    return CompletionRequest(
        model=model,
        input=(
            Message(role="system", content=system_prompt),
            Message(role="user", content=prompt),
        ),
    )


def decode_body(response: httpx.Response) -> Any:
    """Decode a JSON body of any type; a malformed or non-JSON body is ``{}``."""
    try:
        return response.json()
    except ValueError:
        return {}


def error_message(body: Any) -> str:
    """Return ``body.error.message`` when present, else the compact serialised body."""
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict):
        message = err.get("message")
        if isinstance(message, str) and message:
            return message
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


class CompletionClient:
    """Synchronous client for an OpenAI Responses-API compatible endpoint.

    Must be used as a context manager so that the underlying transport is
    opened and closed around the single exchange.

    Args:
        settings: Resolved endpoint, key, model, system prompt, and timeout.
        transport: Optional :class:`httpx.BaseTransport`, e.g. an
            :class:`httpx.MockTransport` in tests.

    Example::

        with CompletionClient(settings) as client:
            command = client.suggest("undo last commit")
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> CompletionClient:
        self._client = httpx.Client(
            timeout=self._settings.timeout,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def suggest(self, prompt: str) -> str:
        """Return the suggested command for *prompt*.

        Raises:
            EndpointError: On a non-2xx response.
            EndpointConnectionError: On network / timeout errors.
            NoSuggestionError: If the response contains no text.
        """
        request = build_request(prompt, self._settings.system_prompt, self._settings.model)
        body = self.send(request)
        suggestion = extract_suggestion(body)
        if not suggestion:
            raise NoSuggestionError("Response does not include output text.")
        return suggestion

    def send(self, request: CompletionRequest) -> Any:
        """POST *request* and return the decoded body.

        Returns:
            The decoded JSON value (any type), or ``{}`` for a non-JSON body.

        Raises:
            EndpointError: On a non-2xx response.
            EndpointConnectionError: On network / timeout errors.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        output = get_output()
        endpoint = self._settings.endpoint
        output.debug(f"POST {endpoint} (model={request.model})")

        try:
            response = self._client.post(
                endpoint,
                headers={
                    "Authorization": f"Bearer {self._settings.api_key}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                content=json.dumps(request.to_payload()),
            )
        except httpx.TransportError as exc:
            raise EndpointConnectionError(f"Request to {endpoint} failed: {exc}") from exc

        output.debug(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())
        body = decode_body(response)
        if not response.is_success:
            raise EndpointError(response.status_code, error_message(body))
        return body
