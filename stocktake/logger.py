import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from . import settings


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(settings.LOG_CONSOLE_FORMAT))
    return handler


def _file_handler(level: int) -> logging.Handler:
    settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        settings.LOG_DIR / settings.LOG_FILENAME,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(settings.LOG_FILE_FORMAT))
    return handler


def setup_logger(name: str = None, log_level: Optional[int] = None) -> logging.Logger:
    """
    Attaches the stocktake console and rotating file handlers to a logger
    (the root logger by default). Level, log directory, filename and rotation
    come from settings at call time. A logger that already has handlers of its
    own is returned as is.
    """
    level = settings.LOG_LEVEL if log_level is None else log_level
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    logger.addHandler(_console_handler(level))
    logger.addHandler(_file_handler(level))
    return logger
