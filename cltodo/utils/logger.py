"""
Logging configuration
"""
import logging
import sys

from cltodo.core.config import get_settings

PACKAGE_LOGGER = "cltodo"


def configure_logging(debug: bool) -> logging.Logger:
    """Attach the stdout handler to the package logger and set its level"""
    logger = logging.getLogger(PACKAGE_LOGGER)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance"""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        configure_logging(get_settings().DEBUG)
    # module loggers inherit level and handler from the package logger
    return logging.getLogger(name)
