"""Logging setup for the contabil CLI."""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
HANDLER_NAME = "contabil-console"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the ``contabil`` logger.

    Safe to call once per CLI invocation: the console handler is reused and
    re-pointed at the current stderr.

    Args:
        level: Level name; defaults to CONTABIL_LOG_LEVEL or WARNING
    """
    level_name = (level or os.environ.get("CONTABIL_LOG_LEVEL", "WARNING")).upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    logger = logging.getLogger("contabil")
    logger.setLevel(log_level)

    handler = next((h for h in logger.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    else:
        handler.setStream(sys.stderr)
    handler.setLevel(log_level)

    return logger
