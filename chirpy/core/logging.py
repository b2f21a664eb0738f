"""Logging configuration for the Chirpy API.

Everything logs through the ``chirpy`` logger to stderr. Auth failures are
logged here with their real reason; clients only ever see the generic message.
"""

import logging
import os
import sys

logger = logging.getLogger("chirpy")

# Only add handler if not already configured
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "[chirpy] %(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_logging() -> None:
    """Apply ``LOG_LEVEL`` to the ``chirpy`` logger. Call again once .env is loaded."""
    logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())


configure_logging()


def get_logger(name: str) -> logging.Logger:
    """Return a child of the ``chirpy`` logger for a module name."""
    if name == "chirpy" or name.startswith("chirpy."):
        return logging.getLogger(name)
    return logger.getChild(name)
