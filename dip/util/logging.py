"""Logging configuration for the application."""

import logging
import sys

from dip.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging used by the HTTP routes.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # httpx logs full request URLs, which include authorization codes
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    # uvicorn access logs include the callback redirect query string
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger("dip").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )
