"""
Logging setup.

Configures the root logger once at startup from settings.LOG_LEVEL.
"""

import logging

from internal_portal.core.config import settings


def setup_logging() -> None:
    loglevel = logging.getLevelName(settings.LOG_LEVEL.upper())

    if isinstance(loglevel, str):
        raise ValueError(f"Invalid loglevel {settings.LOG_LEVEL.upper()}")
    logging.basicConfig(
        level=loglevel,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )
