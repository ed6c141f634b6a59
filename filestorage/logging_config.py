"""
Application logging configuration.

This module provides unified logging configuration for the file storage
package. Every module logger lives under the "filestorage" namespace and
propagates to the handler installed here.
"""
import logging
import sys

from filestorage.config import settings

LOGGER_NAME = "filestorage"


def setup_logging() -> logging.Logger:
    """
    Configure and return the package logger.

    The logger outputs to stdout with a structured format including:
    - Timestamp
    - Logger name
    - Log level
    - Message

    The level is taken from the LOG_LEVEL setting.

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.LOG_LEVEL.upper())

    # Prevent duplicate handlers if called multiple times
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
