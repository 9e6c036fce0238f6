"""Logging setup for liftlog."""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "liftlog"


def configure_logging(level: str | int | None = None) -> None:
    """Attach a stream handler to the package logger.

    The level comes from the argument, then LIFTLOG_LOG_LEVEL, then WARNING.
    Calling this again only adjusts the level.
    """
    if level is None:
        level = os.environ.get("LIFTLOG_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger("liftlog")
    logger.setLevel(level)
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)
