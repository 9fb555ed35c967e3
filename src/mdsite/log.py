"""Logging setup for the CLI"""

import logging
import sys


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr handler (unless the root logger already has one) and set the mdsite level."""
    if not logging.getLogger().handlers:
        logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT)
    logger = logging.getLogger("mdsite")
    logger.setLevel(level.upper())
    return logger
