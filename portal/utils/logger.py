"""
Logging helpers.

All modules obtain loggers through get_logger(__name__); the root
configuration is applied once at startup from Config.
"""

import logging
import sys

from portal.config import Config

_configured = False


def setup_logging(config: Config) -> None:
    """Configure the root logger from LOG_LEVEL / LOG_FORMAT."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
    root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
