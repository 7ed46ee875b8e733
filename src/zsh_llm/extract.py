"""Extract the suggested command from a loosely-typed completion response.

Responses-API bodies nest the generated text several levels deep::

    {"output": [{"type": "message",
                 "content": [{"type": "output_text", "text": "ls -la"}]}]}

Compatible servers vary the shape, so the search is a depth-first walk over
the three JSON container kinds rather than a fixed path:

* **string** -- found when non-empty.
* **array** -- the first element whose extraction succeeds, in order.
* **object** -- ``content`` (recursed into, and final once present, even
  when it is an empty array or object), else ``text``, else ``output_text``.

Everything else (numbers, booleans, ``null``) is not found. Empty strings
are never a suggestion, at any depth.

The single public entry point is :func:`extract_suggestion`.
"""

from __future__ import annotations

from typing import Any, Optional


def extract_text(value: Any) -> Optional[str]:
    """Return the first non-empty text leaf of *value*, or ``None``.

    Args:
        value: A decoded JSON value.

    Example::

        >>> extract_text([{"content": [{"text": ""}, {"text": "pwd"}]}])
        'pwd'
    """
    if isinstance(value, str):
        return value or None

    if isinstance(value, list):
        for item in value:
            candidate = extract_text(item)
            if candidate:
                return candidate
        return None

    if isinstance(value, dict):
        # A present content field decides the outcome; text is not consulted.
        if _present(value.get("content")):
            return extract_text(value["content"])
        for key in ("text", "output_text"):
            text = value.get(key)
            if isinstance(text, str) and text:
                return text
    return None


def _present(value: Any) -> bool:
    """Containers always count as present, even when empty; scalars when truthy."""
    return isinstance(value, (list, dict)) or bool(value)


def extract_suggestion(response: Any) -> Optional[str]:
    """Extract the suggestion from a whole response body.

    Searches ``response["output"]`` first and falls back to the entire body,
    which covers servers that return a top-level ``output_text``.

    Args:
        response: The decoded response body.

    Returns:
        The suggestion text, or ``None`` when the body holds no text.
    """
    if isinstance(response, dict):
        found = extract_text(response.get("output"))
        if found:
            return found
    return extract_text(response)
