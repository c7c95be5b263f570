"""Main entry point - runs the quote API."""

import logging

import uvicorn

from crossroute.config import get_settings
from crossroute.web.app import create_app

logger = logging.getLogger(__name__)


def main():
    """Configure logging and serve the API."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting crossroute...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")

    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
