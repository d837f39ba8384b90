"""Docmee (文多多) PPT generation API client.

Covers the open-platform flow end to end:
1. Exchange an API key for a token
2. Create a task from a prompt and/or uploaded files
3. Stream the generated outline, optionally revising it
4. Pick a template and generate the final PPTX

API Reference: https://docmee.cn/open-platform/api
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Sequence
from functools import lru_cache
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import get_settings
from .errors import ResponseDecodeError, ServiceError, TransportError
from .stream import JsonStreamDecoder
from .types import (
    ApiResponse,
    ArtifactInfo,
    CreateTokenRequest,
    GenerateOutlineRequest,
    GeneratePptxRequest,
    TaskFile,
    TemplatePage,
    TemplateQueryRequest,
    UpdateOutlineRequest,
)

logger = logging.getLogger(__name__)

API_BASE = "https://docmee.cn"

# Request fields never written to logs or error summaries
_REDACTED_FIELDS = frozenset({"apiKey"})
_SUMMARY_TEXT_LIMIT = 256


class DocmeeClient:
    """Async client for the Docmee API.

    Holds configuration only. Every call opens its own connection, so a
    single instance can serve many concurrent calls. No retries are made and
    no timeout is applied unless one is configured.
    """

    def __init__(
        self,
        base_url: str = API_BASE,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = dict(headers or {})
        # Mostly for tests (httpx.MockTransport)
        self._transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _send(
        self,
        method: str,
        path: str,
        *,
        request_summary: Any = None,
        headers: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        files: list[tuple[str, Any]] | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"[docmee] {method} {url} request={request_summary}")
        try:
            async with self._http_client() as client:
                response = await client.request(
                    method, path, headers=headers, json=json, files=files
                )
        except httpx.HTTPError as e:
            raise _connection_failure(method, url, request_summary, e) from e

        _raise_for_status(response, request_summary)
        return response

    # =========================================================================
    # Operations
    # =========================================================================

    async def create_token(
        self,
        api_key: str,
        uid: str | None = None,
        limit: int | None = None,
    ) -> str:
        """
        Exchange an API key for a token.

        Args:
            api_key: Docmee open-platform API key
            uid: Optional third-party user id the token is scoped to
            limit: Optional cap on generations allowed with this token

        Returns:
            The token, sent as the ``token`` header on later calls
        """
        payload = CreateTokenRequest(api_key=api_key, uid=uid, limit=limit).to_payload()
        response = await self._send(
            "POST",
            "/api/user/createApiToken",
            request_summary=_summarize(payload),
            headers={"Api-Key": api_key},
            json=payload,
        )

        data = _unwrap(_decode_envelope(response), "create token")
        token = data.get("token")
        if token is None or isinstance(token, (dict, list)):
            raise ServiceError("Docmee did not return a token")

        logger.info(f"Created Docmee token (uid={uid}, limit={limit})")
        return str(token)

    async def create_task(
        self,
        token: str,
        task_type: int,
        content: str | None = None,
        files: Sequence[TaskFile] = (),
    ) -> ApiResponse:
        """
        Create a generation task.

        The envelope is returned as-is: its payload differs per task type,
        so checking ``code`` is left to the caller.

        Args:
            token: Token from create_token
            task_type: Docmee task type (1 = from prompt, 2 = from files, ...)
            content: Prompt or source text, omitted from the form when None
            files: Files to upload, one ``file`` part each, order preserved
        """
        # (None, value) sends a plain form field inside the multipart body
        parts: list[tuple[str, Any]] = [("type", (None, str(task_type)))]
        if content is not None:
            parts.append(("content", (None, content)))
        for file in files:
            if file.content_type:
                parts.append(("file", (file.filename, file.content, file.content_type)))
            else:
                parts.append(("file", (file.filename, file.content)))

        summary = _summarize({"type": task_type, "content": content})
        if files:
            summary["file"] = [_describe_file(file) for file in files]

        response = await self._send(
            "POST",
            "/api/ppt/v2/createTask",
            request_summary=summary,
            headers={"token": token},
            files=parts,
        )

        envelope = _decode_envelope(response)
        logger.info(f"Created Docmee task (type={task_type}, files={len(files)}): code={envelope.code}")
        return envelope

    async def get_options(self, lang: str | None = None) -> dict[str, Any]:
        """
        Get the outline generation options (lengths, scenes, audiences, ...).

        ``lang`` is appended to the query verbatim, so pass a language code
        such as "zh" or "en", not free text.
        """
        path = "/api/ppt/v2/options"
        if lang is not None:
            path += f"?lang={lang}"

        response = await self._send("GET", path)
        return _unwrap(_decode_envelope(response), "get options")

    def generate_outline(
        self,
        token: str,
        request: GenerateOutlineRequest,
    ) -> AsyncGenerator[dict[str, Any], None]:
        """
        Stream the outline of a task as it is generated.

        Nothing is sent until iteration starts. Each decoded object is
        yielded as soon as it arrives; closing the iterator early closes
        the connection.
        """
        return self._stream("/api/ppt/v2/generateContent", token, request.to_payload())

    def update_outline(
        self,
        token: str,
        id: str,
        markdown: str | None,
        question: str | None,
    ) -> AsyncGenerator[dict[str, Any], None]:
        """
        Stream a revised outline.

        Args:
            token: Token from create_token
            id: Task ID
            markdown: Current outline markdown, omitted from the body when None
            question: The user's revision instructions, omitted when None
        """
        request = UpdateOutlineRequest(id=id, markdown=markdown, question=question)
        return self._stream("/api/ppt/v2/updateContent", token, request.to_payload())

    async def get_template_page(
        self,
        token: str,
        query: TemplateQueryRequest,
    ) -> TemplatePage:
        """Get a page of PPT templates."""
        payload = query.to_payload()
        response = await self._send(
            "POST",
            "/api/ppt/templates",
            request_summary=_summarize(payload),
            headers={"token": token},
            json=payload,
        )

        # This endpoint returns the page itself, without the envelope
        try:
            return TemplatePage.model_validate(response.json())
        except ValueError as e:
            raise ResponseDecodeError(f"Invalid template page response: {e}") from e

    async def generate_artifact(
        self,
        token: str,
        request: GeneratePptxRequest,
    ) -> ArtifactInfo:
        """
        Generate the final PPTX from an outline and a template.

        Returns:
            Metadata of the generated PPT, including its download URL
        """
        payload = request.to_payload()
        response = await self._send(
            "POST",
            "/api/ppt/v2/generatePptx",
            request_summary=_summarize(payload),
            headers={"token": token},
            json=payload,
        )

        data = _unwrap(_decode_envelope(response), "generate pptx")
        ppt_info = data.get("pptInfo")
        if ppt_info is None:
            raise ResponseDecodeError("Docmee response is missing pptInfo")
        try:
            artifact = ArtifactInfo.model_validate(ppt_info)
        except ValidationError as e:
            raise ResponseDecodeError(f"Invalid pptInfo in Docmee response: {e}") from e

        logger.info(f"Generated Docmee PPT {artifact.id} for task {request.id}")
        return artifact

    # =========================================================================
    # Streaming
    # =========================================================================

    async def _stream(
        self,
        path: str,
        token: str,
        payload: dict[str, Any],
    ) -> AsyncGenerator[dict[str, Any], None]:
        url = f"{self.base_url}{path}"
        summary = _summarize(payload)
        decoder = JsonStreamDecoder()
        count = 0

        logger.debug(f"[docmee] POST {url} (stream) request={summary}")
        try:
            async with self._http_client() as client:
                async with client.stream(
                    "POST", path, headers={"token": token}, json=payload
                ) as response:
                    if not response.is_success:
                        await response.aread()
                        _raise_for_status(response, summary)

                    async for line in response.aiter_lines():
                        for item in decoder.feed_line(line):
                            count += 1
                            yield item
                        if decoder.done:
                            break
                    decoder.finish()
        except httpx.HTTPError as e:
            raise _connection_failure("POST", url, summary, e) from e

        logger.debug(f"[docmee] Stream {path} completed after {count} objects")


@lru_cache
def get_docmee_client() -> DocmeeClient:
    """Return a client configured from settings."""
    settings = get_settings()
    return DocmeeClient(settings.docmee_base_url, timeout=settings.docmee_timeout)


# =============================================================================
# Helpers
# =============================================================================


def _raise_for_status(response: httpx.Response, request_summary: Any) -> None:
    """Raise TransportError with the full exchange for a non-2xx response."""
    if response.is_success:
        return

    request = response.request
    body = response.text
    logger.error(
        f"[docmee] Call failed! method={request.method} url={request.url} "
        f"request={request_summary} status={response.status_code} response={body}"
    )
    raise TransportError(
        f"Docmee API error ({response.status_code}): {body}",
        method=request.method,
        url=str(request.url),
        request_summary=request_summary,
        status_code=response.status_code,
        response_body=body,
    )


def _connection_failure(
    method: str,
    url: str,
    request_summary: Any,
    error: httpx.HTTPError,
) -> TransportError:
    logger.error(
        f"[docmee] Call failed! method={method} url={url} "
        f"request={request_summary} error={error!r}"
    )
    return TransportError(
        f"Docmee request failed: {error!r}",
        method=method,
        url=url,
        request_summary=request_summary,
    )


def _decode_envelope(response: httpx.Response) -> ApiResponse:
    try:
        return ApiResponse.model_validate(response.json())
    except ValueError as e:
        raise ResponseDecodeError(f"Invalid Docmee response envelope: {e}") from e


def _unwrap(envelope: ApiResponse, action: str) -> dict[str, Any]:
    """Return the envelope payload, raising ServiceError for a non-zero code."""
    if not envelope.is_success:
        message = envelope.message or f"Docmee returned code {envelope.code}"
        logger.warning(f"Docmee {action} failed (code={envelope.code}): {message}")
        raise ServiceError(message, code=envelope.code)
    return envelope.data or {}


def _summarize(payload: dict[str, Any]) -> dict[str, Any]:
    """Copy a request body for logging: secrets masked, long text cut."""
    summary: dict[str, Any] = {}
    for key, value in payload.items():
        if key in _REDACTED_FIELDS:
            summary[key] = "***"
        elif isinstance(value, str) and len(value) > _SUMMARY_TEXT_LIMIT:
            summary[key] = f"{value[:_SUMMARY_TEXT_LIMIT]}... ({len(value)} chars)"
        else:
            summary[key] = value
    return summary


def _describe_file(file: TaskFile) -> dict[str, Any]:
    description: dict[str, Any] = {"filename": file.filename}
    if isinstance(file.content, bytes):
        description["size"] = len(file.content)
    return description
