"""Process-wide logging configuration."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "LOG_ANALYZER_LOG_LEVEL"
SERVER_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CLI_FORMAT = "log-analyzer: %(levelname)s %(message)s"


def configure_logging(fmt: str = SERVER_FORMAT) -> None:
    """Configure root logging on stderr; level comes from LOG_ANALYZER_LOG_LEVEL."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=fmt)
