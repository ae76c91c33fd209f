"""Logging configuration for the stdio server."""

import logging
import sys
from typing import Optional

from ..config import Settings
from ..config.settings import DEFAULT_LOG_FORMAT


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure application logging.

    Logs always go to stderr; stdout carries the MCP protocol stream.

    Args:
        settings: Settings supplying level and format. Defaults to INFO
            when settings could not be loaded.
    """
    level = settings.LOG_LEVEL if settings else "INFO"
    log_format = settings.LOG_FORMAT if settings else DEFAULT_LOG_FORMAT

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        stream=sys.stderr,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("mcp").setLevel(logging.WARNING)
