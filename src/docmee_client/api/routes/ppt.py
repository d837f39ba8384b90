"""API routes relaying the Docmee PPT generation flow."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Any

from fastapi import APIRouter, Depends, File, Form, Header, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from ...config import get_settings
from ...docmee import (
    DocmeeClient,
    DocmeeError,
    GenerateOutlineRequest,
    GeneratePptxRequest,
    TaskFile,
    TemplateQueryRequest,
    TransportError,
    UpdateOutlineRequest,
    get_docmee_client,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class CreateTokenBody(BaseModel):
    """Request body for creating a Docmee token."""

    uid: str | None = None
    limit: int | None = None


def _http_error(error: DocmeeError) -> HTTPException:
    if isinstance(error, TransportError):
        return HTTPException(status_code=502, detail=f"Docmee unavailable: {error}")
    return HTTPException(status_code=400, detail=str(error))


def _sse(item: dict[str, Any], event: str | None = None) -> str:
    data = json.dumps(item, ensure_ascii=False)
    return f"event: {event}\ndata: {data}\n\n" if event else f"data: {data}\n\n"


async def _relay_stream(items: AsyncGenerator[dict[str, Any], None]) -> StreamingResponse:
    """Relay a Docmee stream as SSE.

    The first object is awaited before responding so that a failed upstream
    call still surfaces as an HTTP error instead of an empty event stream.
    """
    try:
        first = await anext(items)
    except StopAsyncIteration:
        first = None
    except DocmeeError as e:
        await items.aclose()
        raise _http_error(e) from e

    async def events() -> AsyncIterator[str]:
        try:
            if first is None:
                return
            yield _sse(first)
            async for item in items:
                yield _sse(item)
        except DocmeeError as e:
            logger.warning(f"Docmee stream aborted: {e}")
            yield _sse({"error": str(e)}, event="error")
        finally:
            await items.aclose()

    return StreamingResponse(events(), media_type="text/event-stream")


@router.post("/token")
async def create_token(
    body: CreateTokenBody,
    client: DocmeeClient = Depends(get_docmee_client),
):
    """Create a Docmee token using the configured API key."""
    settings = get_settings()
    if not settings.docmee_api_key:
        raise HTTPException(status_code=500, detail="DOCMEE_API_KEY is not configured")

    try:
        token = await client.create_token(settings.docmee_api_key, uid=body.uid, limit=body.limit)
    except DocmeeError as e:
        raise _http_error(e) from e
    return {"token": token}


@router.post("/tasks")
async def create_task(
    task_type: int = Form(..., alias="type"),
    content: str | None = Form(default=None),
    files: list[UploadFile] | None = File(default=None),
    token: str = Header(...),
    client: DocmeeClient = Depends(get_docmee_client),
):
    """Create a generation task from a prompt and/or uploaded files."""
    task_files = [
        TaskFile(
            filename=upload.filename or "file",
            content=await upload.read(),
            content_type=upload.content_type,
        )
        for upload in files or []
    ]

    try:
        envelope = await client.create_task(token, task_type, content=content, files=task_files)
    except DocmeeError as e:
        raise _http_error(e) from e
    return envelope.model_dump(mode="json")


@router.get("/options")
async def get_options(
    lang: str | None = Query(default=None, pattern=r"^[A-Za-z]{2,3}([_-][A-Za-z]{2,4})?$"),
    client: DocmeeClient = Depends(get_docmee_client),
):
    """List the outline generation options."""
    try:
        options = await client.get_options(lang)
    except DocmeeError as e:
        raise _http_error(e) from e
    return {"options": options}


@router.post("/outline")
async def generate_outline(
    request: GenerateOutlineRequest,
    token: str = Header(...),
    client: DocmeeClient = Depends(get_docmee_client),
):
    """Stream the generated outline of a task as Server-Sent Events."""
    return await _relay_stream(client.generate_outline(token, request))


@router.post("/outline/update")
async def update_outline(
    request: UpdateOutlineRequest,
    token: str = Header(...),
    client: DocmeeClient = Depends(get_docmee_client),
):
    """Stream a revised outline as Server-Sent Events."""
    if not request.id:
        raise HTTPException(status_code=400, detail="Task id is required")
    return await _relay_stream(
        client.update_outline(token, request.id, request.markdown, request.question)
    )


@router.post("/templates")
async def list_templates(
    query: TemplateQueryRequest,
    token: str = Header(...),
    client: DocmeeClient = Depends(get_docmee_client),
):
    """Get a page of PPT templates."""
    try:
        page = await client.get_template_page(token, query)
    except DocmeeError as e:
        raise _http_error(e) from e
    return page.model_dump(mode="json", by_alias=True)


@router.post("/generate")
async def generate_pptx(
    request: GeneratePptxRequest,
    token: str = Header(...),
    client: DocmeeClient = Depends(get_docmee_client),
):
    """Generate the final PPTX."""
    try:
        artifact = await client.generate_artifact(token, request)
    except DocmeeError as e:
        raise _http_error(e) from e
    return {"pptInfo": artifact.to_payload()}
