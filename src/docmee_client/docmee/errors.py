"""Errors raised by the Docmee client."""

from __future__ import annotations

from typing import Any


class DocmeeError(Exception):
    """Base class for every error raised by the Docmee client."""


class TransportError(DocmeeError):
    """The HTTP exchange itself failed.

    Raised for a non-2xx status or a connection/stream failure. Carries
    enough of the exchange to diagnose it without re-running the call.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        request_summary: Any = None,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.method = method
        self.url = url
        self.request_summary = request_summary
        self.status_code = status_code
        self.response_body = response_body


class ServiceError(DocmeeError):
    """The service answered, but reported a failure or omitted a required field."""

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ResponseDecodeError(ServiceError):
    """A successful response could not be decoded into the expected shape."""
