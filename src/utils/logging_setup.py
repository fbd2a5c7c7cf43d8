"""
Logging Setup
Configures the root logger from the environment configuration.
"""

import logging
import os
from typing import Union

from src.core.environment import get_config

LOG_LEVEL_ENV = "REFKEEPER_LOG_LEVEL"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"


def _coerce_level(value: Union[str, int, None], fallback: int) -> int:
    if value is None or value == "":
        return fallback
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    candidate = getattr(logging, text.upper(), None)
    return candidate if isinstance(candidate, int) else fallback


def configure_logging(level: Union[str, int, None] = None) -> int:
    """
    Configure the root logger with a compact format.

    Precedence: explicit ``level`` argument, then REFKEEPER_LOG_LEVEL, then
    the log level of the current environment.

    Returns:
        The effective level.
    """
    fallback = _coerce_level(get_config().log_level, logging.WARNING)
    effective = _coerce_level(os.environ.get(LOG_LEVEL_ENV), fallback)
    effective = _coerce_level(level, effective)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(effective)
    return effective
