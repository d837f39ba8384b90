"""Wire types for the Docmee PPT API.

Request models serialize with camelCase aliases and drop unset fields, so an
optional value that was never provided is omitted from the body instead of
being sent as ``null``. Response models ignore unknown keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import IO, Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer

# Docmee renders every timestamp as "yyyy-MM-dd HH:mm:ss"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_timestamp(value: Any) -> Any:
    if isinstance(value, str):
        if not value.strip():
            return None
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    return value


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


def _none_as(default: Any) -> BeforeValidator:
    return BeforeValidator(lambda value: default if value is None else value)


def _format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


Timestamp = Annotated[
    datetime | None,
    BeforeValidator(_parse_timestamp),
    PlainSerializer(_format_timestamp, when_used="json-unless-none"),
]

# The service sends null for empty lists and for unset numeric/flag fields
NullableList = BeforeValidator(_none_as_empty)
NullableInt = Annotated[int, _none_as(0)]
NullableBool = Annotated[bool, _none_as(False)]


class DocmeeModel(BaseModel):
    """Base model shared by every Docmee request and response shape."""

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "coerce_numbers_to_str": True,
    }

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body sent over the wire."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class TaskFile:
    """A file attached to a task creation request."""
    filename: str
    content: bytes | IO[bytes]
    content_type: str | None = None


# =============================================================================
# Requests
# =============================================================================


class CreateTokenRequest(DocmeeModel):
    api_key: str = Field(..., alias="apiKey")
    uid: str | None = None
    limit: int | None = None


class GenerateOutlineRequest(DocmeeModel):
    """Outline generation request for a task created via createTask."""

    id: str | None = None
    length: str | None = None
    scene: str | None = None
    audience: str | None = None
    lang: str | None = None
    prompt: str | None = None


class UpdateOutlineRequest(DocmeeModel):
    id: str | None = None
    markdown: str | None = None
    question: str | None = None


class GeneratePptxRequest(DocmeeModel):
    id: str
    template_id: str | None = Field(default=None, alias="templateId")
    markdown: str | None = None


class TemplateFilter(DocmeeModel):
    type: int = 1
    category: str | None = None
    style: str | None = None
    theme_color: str | None = Field(default=None, alias="themeColor")


class TemplateQueryRequest(DocmeeModel):
    page: int = 1
    size: int = 10
    filters: TemplateFilter = Field(default_factory=TemplateFilter)


# =============================================================================
# Responses
# =============================================================================


class ApiResponse(DocmeeModel):
    """The ``{code, message, data}`` envelope wrapping most responses."""

    code: int
    message: str | None = None
    data: dict[str, Any] | None = None

    @property
    def is_success(self) -> bool:
        return self.code == 0


class ArtifactInfo(DocmeeModel):
    """Metadata of a generated PPT (``pptInfo``)."""

    id: str
    name: str | None = None
    subject: str | None = None
    cover_url: str | None = Field(default=None, alias="coverUrl")
    file_url: str | None = Field(default=None, alias="fileUrl")
    template_id: str | None = Field(default=None, alias="templateId")
    pptx_property: str | None = Field(default=None, alias="pptxProperty")
    user_id: str | None = Field(default=None, alias="userId")
    user_name: str | None = Field(default=None, alias="userName")
    company_id: int | None = Field(default=None, alias="companyId")
    update_time: Timestamp = Field(default=None, alias="updateTime")
    create_time: Timestamp = Field(default=None, alias="createTime")
    create_user: str | None = Field(default=None, alias="createUser")
    update_user: str | None = Field(default=None, alias="updateUser")


class TemplateInfo(DocmeeModel):
    id: str
    type: NullableInt = 0
    sub_type: int | None = Field(default=None, alias="subType")
    layout: str | None = None
    category: str | None = None
    style: str | None = None
    theme_color: str | None = Field(default=None, alias="themeColor")
    lang: str | None = None
    animation: NullableBool = False
    subject: str | None = None
    cover_url: str | None = Field(default=None, alias="coverUrl")
    file_url: str | None = Field(default=None, alias="fileUrl")
    page_cover_urls: Annotated[list[str], NullableList] = Field(
        default_factory=list, alias="pageCoverUrls"
    )
    pptx_property: str | None = Field(default=None, alias="pptxProperty")
    sort: NullableInt = 0
    num: NullableInt = 0
    img_num: int | None = Field(default=None, alias="imgNum")
    is_deleted: NullableInt = Field(default=0, alias="isDeleted")
    user_id: str | None = Field(default=None, alias="userId")
    company_id: NullableInt = Field(default=0, alias="companyId")
    update_time: Timestamp = Field(default=None, alias="updateTime")
    create_time: Timestamp = Field(default=None, alias="createTime")
    create_user: str | None = Field(default=None, alias="createUser")
    update_user: str | None = Field(default=None, alias="updateUser")


class TemplatePage(DocmeeModel):
    """Template page container. Not wrapped in the envelope."""

    data: Annotated[list[TemplateInfo], NullableList] = Field(default_factory=list)
    total: str = "0"
