"""Operate-log lookups for CRM entities."""

from .biz_types import BIZ_TYPE_LOG_CATEGORIES, BizType, get_log_category
from .client import (
    PAGE_SIZE_NONE,
    OperateLogClient,
    OperateLogEntry,
    OperateLogPage,
    OperateLogServiceError,
    get_operate_log_client,
)

__all__ = [
    "BIZ_TYPE_LOG_CATEGORIES",
    "BizType",
    "get_log_category",
    "PAGE_SIZE_NONE",
    "OperateLogClient",
    "OperateLogEntry",
    "OperateLogPage",
    "OperateLogServiceError",
    "get_operate_log_client",
]
