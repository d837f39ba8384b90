"""Client for the operate-log service.

Read-through only: the CRM admin screens show the change history of one
entity, so logs are always fetched in full rather than page by page.
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache
from typing import Any

import httpx
from pydantic import BaseModel, Field

from ..config import get_settings
from .biz_types import get_log_category

logger = logging.getLogger(__name__)

# Page size understood by the log service as "no paging"
PAGE_SIZE_NONE = -1


class OperateLogServiceError(Exception):
    """Error from the operate-log service."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OperateLogEntry(BaseModel):
    """One recorded operation on a business entity."""

    id: int
    user_id: int | None = Field(default=None, alias="userId")
    user_type: int | None = Field(default=None, alias="userType")
    creator_name: str | None = Field(default=None, alias="creatorName")
    type: str | None = None
    sub_type: str | None = Field(default=None, alias="subType")
    biz_id: int | None = Field(default=None, alias="bizId")
    action: str | None = None
    extra: str | None = None
    create_time: datetime | None = Field(default=None, alias="createTime")

    model_config = {"populate_by_name": True}


class OperateLogPage(BaseModel):
    items: list[OperateLogEntry] = Field(default_factory=list, alias="list")
    total: int = 0

    model_config = {"populate_by_name": True}


class OperateLogClient:
    """Fetches operate logs of a CRM entity from the log service."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def get_operate_log_page(self, biz_type: int, biz_id: int) -> OperateLogPage:
        """
        Get every operate log recorded for an entity.

        Args:
            biz_type: CRM business type code (see BizType)
            biz_id: ID of the entity

        Returns:
            All matching logs, unpaginated
        """
        params: dict[str, Any] = {
            "bizType": get_log_category(biz_type),
            "bizId": biz_id,
            "pageSize": PAGE_SIZE_NONE,
        }
        url = f"{self.base_url}/system/operate-log/page"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Operate log lookup failed for {params}: {e!r}")
            raise OperateLogServiceError(f"Failed to reach operate log service: {e!r}") from e

        if not response.is_success:
            logger.error(
                f"Operate log lookup failed ({response.status_code}) for {params}: {response.text}"
            )
            raise OperateLogServiceError(
                f"Failed to get operate logs ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )

        try:
            return OperateLogPage.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Invalid operate log response for {params}: {response.text}")
            raise OperateLogServiceError(f"Invalid operate log response: {e}") from e


@lru_cache
def get_operate_log_client() -> OperateLogClient:
    settings = get_settings()
    return OperateLogClient(settings.operate_log_service_url)
