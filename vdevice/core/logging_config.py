"""Logging setup for applications embedding the package.

Library modules only create loggers; handlers are configured here, on
request, from the package settings.
"""
import logging
from typing import Optional

from .config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: Optional[Settings] = None) -> int:
    """Apply ``logging.basicConfig`` from settings and return the level used."""
    config = config or default_settings
    level = logging.getLevelName(config.get_log_level())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("vdevice").setLevel(level)
    return level
