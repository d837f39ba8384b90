"""API routes for CRM operate logs."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ...operate_log import (
    OperateLogClient,
    OperateLogServiceError,
    get_log_category,
    get_operate_log_client,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/page")
async def get_operate_log_page(
    biz_type: int = Query(..., alias="bizType"),
    biz_id: int = Query(..., alias="bizId"),
    client: OperateLogClient = Depends(get_operate_log_client),
):
    """Get the full operate log of a CRM entity."""
    try:
        get_log_category(biz_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        page = await client.get_operate_log_page(biz_type, biz_id)
    except OperateLogServiceError as e:
        logger.exception(f"Failed to get operate logs: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to get operate logs: {e}")

    return page.model_dump(mode="json", by_alias=True)
