"""
Logging configuration for the X2/X3 decoder.

Environment Variables:
    X2X3_LOG_LEVEL - Log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
"""

import logging
import os
import sys
from typing import Optional, TextIO


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    name: str = "x2x3",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Setup logging for the decoder.

    Args:
        level: Log level. Default from X2X3_LOG_LEVEL or INFO.
        format_string: Custom format. Default: timestamp + level + name + message.
        name: Logger name.
        stream: Handler stream. Default: stdout. The CLI passes stderr so
            decode results stay alone on stdout.

    Returns:
        Configured logger instance.
    """
    if level is None:
        level = os.getenv("X2X3_LOG_LEVEL", "INFO")
    level = level.upper()

    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Clear existing handlers
    logger.handlers.clear()

    if stream is None:
        stream = sys.stdout

    handler = logging.StreamHandler(stream)
    handler.setLevel(getattr(logging, level, logging.INFO))
    handler.setFormatter(logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S"))

    logger.addHandler(handler)

    return logger


def get_logger(name: str = "x2x3") -> logging.Logger:
    """
    Get or create a logger.

    Args:
        name: Logger name (prefixed with 'x2x3.' if not already)

    Returns:
        Logger instance.
    """
    if not name.startswith("x2x3"):
        name = f"x2x3.{name}"

    logger = logging.getLogger(name)

    # Initialize if no handlers
    if not logger.handlers and not logging.getLogger("x2x3").handlers:
        setup_logging()

    return logger
