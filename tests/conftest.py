"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from docmee_client.docmee import DocmeeClient

from tests.helpers import BASE_URL, RecordingHandler


@pytest.fixture
def make_client():
    """Build a DocmeeClient whose transport answers with the given response."""

    def _make(
        status_code: int = 200,
        *,
        json: Any = None,
        content: bytes | None = None,
        stream: httpx.AsyncByteStream | None = None,
    ) -> tuple[DocmeeClient, RecordingHandler]:
        def respond(request: httpx.Request) -> httpx.Response:
            if stream is not None:
                return httpx.Response(status_code, stream=stream)
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json)

        handler = RecordingHandler(respond)
        client = DocmeeClient(BASE_URL, transport=httpx.MockTransport(handler))
        return client, handler

    return _make


@pytest.fixture
def sample_ppt_info():
    """Sample pptInfo payload from generatePptx."""
    return {
        "id": "p1",
        "name": "Quarterly Review",
        "subject": "Q3 results",
        "coverUrl": "https://cdn.docmee.test/p1/cover.png",
        "fileUrl": "https://cdn.docmee.test/p1/deck.pptx",
        "templateId": "tpl-9",
        "userId": "u-1",
        "userName": "alice",
        "companyId": 42,
        "createTime": "2024-05-06 09:30:00",
        "updateTime": "2024-05-06 09:31:15",
    }


@pytest.fixture
def sample_template():
    """Sample template entry from the template page endpoint."""
    return {
        "id": "tpl-9",
        "type": 1,
        "subType": None,
        "layout": "16:9",
        "category": "business",
        "style": "flat",
        "themeColor": "#1F6FEB",
        "lang": "en",
        "animation": True,
        "subject": "Corporate",
        "coverUrl": "https://cdn.docmee.test/tpl-9/cover.png",
        "pageCoverUrls": [
            "https://cdn.docmee.test/tpl-9/1.png",
            "https://cdn.docmee.test/tpl-9/2.png",
        ],
        "sort": 3,
        "num": 12,
        "isDeleted": 0,
        "companyId": 0,
        "createTime": "2024-01-02 03:04:05",
    }
