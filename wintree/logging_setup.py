from __future__ import annotations

import logging
import logging.handlers
import os
from typing import Optional

LOGGER_NAME = "WindowTreeInspector"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    # stderr only; stdout carries the tree or the JSON document
    stream_handler = logging.StreamHandler()
    level_name = (level or "WARNING").upper()
    stream_handler.setLevel(getattr(logging, level_name, logging.WARNING))
    stream_handler.setFormatter(fmt)
    logger.addHandler(stream_handler)

    return logger


__all__ = ["setup_logging", "LOGGER_NAME"]
