"""
Centralized logging configuration for jjvote.
"""

import logging
import sys

from .config import LOG_LEVEL


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("jjvote")
    # uvicorn reload / repeated create_app() must not stack handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(LOG_LEVEL)
    return logger
