"""Run the docmee client service: ``python -m docmee_client``."""

from __future__ import annotations

import logging

import uvicorn

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> int:
    """Set up root logging for the service and return the level used.

    httpx logs every outbound request at INFO, which would duplicate the
    client's own request logging, so it is only let through in debug mode.
    """
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.DEBUG if settings.debug else logging.WARNING)
    return level


def main():
    """Run the docmee client service."""
    settings = get_settings()
    level = configure_logging(settings)

    timeout = f"{settings.docmee_timeout}s" if settings.docmee_timeout else "none"
    logger.info(
        f"Starting docmee client service on {settings.app_host}:{settings.app_port} "
        f"(docmee: {settings.docmee_base_url}, timeout: {timeout})"
    )

    uvicorn.run(
        "docmee_client.api.app:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
        log_level=logging.getLevelName(level).lower(),
    )


if __name__ == "__main__":
    main()
