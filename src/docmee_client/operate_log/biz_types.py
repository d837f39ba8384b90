"""CRM business types and the operate-log category each one is recorded under."""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType


class BizType(IntEnum):
    """CRM business entity types."""
    LEADS = 1
    CUSTOMER = 2
    CONTACT = 3
    BUSINESS = 4
    CONTRACT = 5
    PRODUCT = 6
    RECEIVABLE = 7
    RECEIVABLE_PLAN = 8


BIZ_TYPE_LOG_CATEGORIES = MappingProxyType({
    BizType.LEADS: "CRM 线索",
    BizType.CUSTOMER: "CRM 客户",
    BizType.CONTACT: "CRM 联系人",
    BizType.BUSINESS: "CRM 商机",
    BizType.CONTRACT: "CRM 合同",
    BizType.PRODUCT: "CRM 产品",
    BizType.RECEIVABLE: "CRM 回款",
    BizType.RECEIVABLE_PLAN: "CRM 回款计划",
})


def _validate_categories() -> None:
    missing = [biz_type.name for biz_type in BizType if biz_type not in BIZ_TYPE_LOG_CATEGORIES]
    if missing:
        raise RuntimeError(f"No operate-log category for business types: {', '.join(missing)}")
    categories = list(BIZ_TYPE_LOG_CATEGORIES.values())
    if len(set(categories)) != len(categories):
        raise RuntimeError("Operate-log categories must be unique per business type")


_validate_categories()


def get_log_category(biz_type: int) -> str:
    """
    Resolve the operate-log category for a business type code.

    Raises:
        ValueError: If the code is not a known business type.
    """
    try:
        return BIZ_TYPE_LOG_CATEGORIES[BizType(biz_type)]
    except ValueError:
        supported = ", ".join(f"{t.value} ({t.name.lower()})" for t in BizType)
        raise ValueError(
            f"Unknown business type {biz_type}. Supported types: {supported}"
        ) from None
