"""Docmee PPT generation API client."""

from .client import (
    API_BASE,
    DocmeeClient,
    get_docmee_client,
)
from .errors import (
    DocmeeError,
    ResponseDecodeError,
    ServiceError,
    TransportError,
)
from .types import (
    ApiResponse,
    ArtifactInfo,
    CreateTokenRequest,
    GenerateOutlineRequest,
    GeneratePptxRequest,
    TaskFile,
    TemplateFilter,
    TemplateInfo,
    TemplatePage,
    TemplateQueryRequest,
    UpdateOutlineRequest,
)

__all__ = [
    "API_BASE",
    "DocmeeClient",
    "get_docmee_client",
    "DocmeeError",
    "ResponseDecodeError",
    "ServiceError",
    "TransportError",
    "ApiResponse",
    "ArtifactInfo",
    "CreateTokenRequest",
    "GenerateOutlineRequest",
    "GeneratePptxRequest",
    "TaskFile",
    "TemplateFilter",
    "TemplateInfo",
    "TemplatePage",
    "TemplateQueryRequest",
    "UpdateOutlineRequest",
]
