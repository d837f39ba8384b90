"""Tests for the operate-log lookup."""

from __future__ import annotations

import httpx
import pytest

from docmee_client.operate_log import (
    BIZ_TYPE_LOG_CATEGORIES,
    PAGE_SIZE_NONE,
    BizType,
    OperateLogClient,
    OperateLogServiceError,
    get_log_category,
)

from tests.helpers import RecordingHandler

LOG_SERVICE_URL = "http://logs.test"


@pytest.fixture
def sample_log_page():
    return {
        "list": [
            {
                "id": 11,
                "userId": 1,
                "userType": 2,
                "creatorName": "admin",
                "type": "CRM 客户",
                "subType": "更新客户",
                "bizId": 1024,
                "action": "更新了客户名称",
                "createTime": 1714980600000,
            }
        ],
        "total": 1,
    }


class TestBizTypeCategories:
    """Tests for the business type to log category lookup."""

    def test_every_biz_type_has_a_category(self):
        assert set(BIZ_TYPE_LOG_CATEGORIES) == set(BizType)

    def test_categories_are_unique(self):
        categories = list(BIZ_TYPE_LOG_CATEGORIES.values())
        assert len(set(categories)) == len(categories)

    def test_lookup_by_code(self):
        assert get_log_category(2) == "CRM 客户"
        assert get_log_category(BizType.RECEIVABLE_PLAN) == "CRM 回款计划"

    def test_unknown_code_raises(self):
        with pytest.raises(ValueError) as exc_info:
            get_log_category(99)

        assert "Supported types" in str(exc_info.value)

    def test_mapping_is_read_only(self):
        with pytest.raises(TypeError):
            BIZ_TYPE_LOG_CATEGORIES[BizType.LEADS] = "changed"  # type: ignore[index]


class TestOperateLogClient:
    """Tests for OperateLogClient."""

    @pytest.mark.asyncio
    async def test_requests_full_result_set(self, sample_log_page):
        """Should query by category and entity id without paging."""
        handler = RecordingHandler(lambda request: httpx.Response(200, json=sample_log_page))
        client = OperateLogClient(LOG_SERVICE_URL, transport=httpx.MockTransport(handler))

        page = await client.get_operate_log_page(BizType.CUSTOMER, 1024)

        assert page.total == 1
        assert page.items[0].action == "更新了客户名称"
        assert page.items[0].create_time.year == 2024

        request = handler.last_request
        assert request.url.path == "/system/operate-log/page"
        assert request.url.params["bizType"] == "CRM 客户"
        assert request.url.params["bizId"] == "1024"
        assert request.url.params["pageSize"] == str(PAGE_SIZE_NONE)

    @pytest.mark.asyncio
    async def test_unknown_biz_type_sends_nothing(self):
        handler = RecordingHandler(lambda request: httpx.Response(200, json={}))
        client = OperateLogClient(LOG_SERVICE_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(ValueError):
            await client.get_operate_log_page(0, 1)

        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_service_error(self):
        handler = RecordingHandler(lambda request: httpx.Response(503, text="unavailable"))
        client = OperateLogClient(LOG_SERVICE_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(OperateLogServiceError) as exc_info:
            await client.get_operate_log_page(BizType.CONTRACT, 5)

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_unreachable_service(self):
        """Connection failures surface as OperateLogServiceError."""

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = OperateLogClient(LOG_SERVICE_URL, transport=httpx.MockTransport(refuse))

        with pytest.raises(OperateLogServiceError) as exc_info:
            await client.get_operate_log_page(BizType.LEADS, 1)

        assert exc_info.value.status_code is None
        assert "Failed to reach" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        handler = RecordingHandler(lambda request: httpx.Response(200, text="<html>login</html>"))
        client = OperateLogClient(LOG_SERVICE_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(OperateLogServiceError) as exc_info:
            await client.get_operate_log_page(BizType.LEADS, 1)

        assert "Invalid operate log response" in str(exc_info.value)
