"""Shared test helpers (mock transports and streamed bodies)."""

from __future__ import annotations

from typing import Callable

import httpx

BASE_URL = "https://docmee.test"


class ChunkedStream(httpx.AsyncByteStream):
    """Response body delivered chunk by chunk, optionally failing at the end."""

    def __init__(self, chunks: list[bytes], error: Exception | None = None):
        self.chunks = chunks
        self.error = error
        self.delivered = 0
        self.closed = False

    async def __aiter__(self):
        for chunk in self.chunks:
            self.delivered += 1
            yield chunk
        if self.error is not None:
            raise self.error

    async def aclose(self) -> None:
        self.closed = True


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response_factory: Callable[[httpx.Request], httpx.Response]):
        self.response_factory = response_factory
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response_factory(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]
