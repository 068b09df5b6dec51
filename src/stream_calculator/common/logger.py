"""Project-wide logger shared by the engine and the front end."""
import logging
import os
import sys
from typing import Optional

LOGGER_NAME: str = "stream_calculator"
LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_LEVEL_ENV: str = "STREAM_CALCULATOR_LOG_LEVEL"
DEFAULT_LOG_LEVEL: str = "WARNING"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)
# Stay silent until the application configures logging
logger.addHandler(logging.NullHandler())


def resolve_log_level(level: Optional[str] = None) -> str:
    """
    Resolve the effective log level name.

    An explicit level wins over the environment, which wins over the default.

    :param str level: Level name given on the command line, if any

    :return: Upper-cased logging level name
    :rtype: str
    :raises ValueError: If the level name is not a standard logging level
    """
    name: str = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"Unknown log level: {name}")
    return name


def configure_logging(level: Optional[str] = None) -> None:
    """
    Attach a single stderr handler to the project logger.

    Calling it again replaces the previous handler instead of stacking a new one.

    :param str level: Level name, see resolve_log_level
    """
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_log_level(level))
