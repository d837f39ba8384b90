"""Runtime configuration for the docmee client service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the docmee client service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Docmee API
    docmee_base_url: str = Field(default="https://docmee.cn", alias="DOCMEE_BASE_URL")
    docmee_api_key: str | None = Field(default=None, alias="DOCMEE_API_KEY")
    # Unset means no client-side timeout; callers bound calls themselves
    docmee_timeout: float | None = Field(default=None, alias="DOCMEE_TIMEOUT")

    # Operate log service
    operate_log_service_url: str = Field(
        default="http://localhost:48080", alias="OPERATE_LOG_SERVICE_URL"
    )

    # FastAPI
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8083, alias="APP_PORT")
    debug: bool = Field(default=False, alias="DEBUG")


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings so multiple imports share a single instance."""

    return Settings()  # type: ignore[call-arg]
