"""Incremental decoding of the Docmee streaming endpoints.

The outline endpoints answer with a series of JSON objects over one HTTP
response. Depending on the deployment these arrive either newline-delimited
or framed as Server-Sent Events (``data: {...}``). The decoder accepts both,
one line at a time, so each object can be handed on as soon as it is complete.
"""

from __future__ import annotations

import json
from typing import Any

from .errors import ResponseDecodeError

DONE_SENTINEL = "[DONE]"

# SSE fields that never carry payload
_IGNORED_SSE_FIELDS = frozenset({"event", "id", "retry"})


class JsonStreamDecoder:
    """Turn lines of a streamed body into decoded JSON objects.

    A value may span several lines and one line may hold several values, so
    text that is valid so far is buffered until it forms a complete value.
    Text that can never become valid JSON fails immediately.
    """

    def __init__(self) -> None:
        self._decoder = json.JSONDecoder()
        self._buffer = ""
        self.done = False

    def feed_line(self, line: str) -> list[dict[str, Any]]:
        """Feed one line; return every object it completed."""
        if self.done:
            return []

        payload = self._strip_framing(line)
        if payload is None:
            return []
        if payload == DONE_SENTINEL and not self._buffer:
            self.done = True
            return []

        self._buffer = f"{self._buffer}\n{payload}" if self._buffer else payload
        return self._drain()

    def finish(self) -> None:
        """Check nothing undecoded is left once the body has ended."""
        if self._buffer.strip():
            snippet = self._buffer.strip()[:200]
            raise ResponseDecodeError(f"Stream ended inside an incomplete JSON value: {snippet!r}")

    @staticmethod
    def _strip_framing(line: str) -> str | None:
        stripped = line.strip()
        # Blank lines separate SSE events; ":" starts an SSE comment
        if not stripped or stripped.startswith(":"):
            return None

        field, sep, value = stripped.partition(":")
        if sep and field in _IGNORED_SSE_FIELDS:
            return None
        if sep and field == "data":
            value = value.strip()
            return value or None
        return stripped

    def _drain(self) -> list[dict[str, Any]]:
        values: list[dict[str, Any]] = []
        while True:
            text = self._buffer.lstrip()
            if not text:
                self._buffer = ""
                return values
            try:
                value, end = self._decoder.raw_decode(text)
            except json.JSONDecodeError as e:
                if e.pos < len(text):
                    raise ResponseDecodeError(
                        f"Malformed JSON in stream at offset {e.pos}: {text[:200]!r}"
                    ) from e
                # Ran out of input; wait for more lines
                self._buffer = text
                return values
            self._buffer = text[end:]
            values.extend(_as_objects(value))


def _as_objects(value: Any) -> list[dict[str, Any]]:
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list) and all(isinstance(item, dict) for item in value):
        return value
    raise ResponseDecodeError(f"Expected a JSON object in stream, got {type(value).__name__}")
