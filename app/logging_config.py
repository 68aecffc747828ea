"""Console logging for the api-store service.

All loggers live under the ``api_store`` namespace and write through a single
rich handler.
"""

import logging
from typing import Union

from rich.logging import RichHandler

__all__ = ["setup_logging", "get_logger"]

ROOT_LOGGER = "api_store"


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure the ``api_store`` logger.

    Safe to call more than once: previous handlers are replaced.

    Args:
        level: Logging level, as an int or a level name such as "DEBUG"

    Returns:
        The configured root logger for the service
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    # request lines carry their own ISO-8601 stamp
    handler = RichHandler(show_time=False, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    if name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
