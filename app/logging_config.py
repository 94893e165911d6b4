from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, TextIO

LOGGER_NAME = "tinyocr"
LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOG_LEVELS: dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LOG_LEVEL_ALIASES: dict[str, str] = {
    "warn": "warning",
    "fatal": "critical",
}


def resolve_log_level(value: str | None) -> int | None:
    if not value:
        return None
    name = value.strip().lower()
    name = LOG_LEVEL_ALIASES.get(name, name)
    return LOG_LEVELS.get(name)


def build_logger(
    name: str = LOGGER_NAME,
    env: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    env = os.environ if env is None else env
    logger = logging.getLogger(name)
    if not logger.handlers:
        # stdout belongs to the frame protocol
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(logging.INFO)
    level = resolve_log_level(env.get(LOG_LEVEL_ENV))
    if level is not None:
        logger.setLevel(level)
    return logger
