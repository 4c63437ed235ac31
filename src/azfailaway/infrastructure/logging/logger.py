"""Logging setup for the failover tooling."""

import logging
import sys
from typing import Optional

from azfailaway.config.schemas.app_schema import LoggingConfig

ROOT_LOGGER_NAME = "azfailaway"

# Botocore is chatty at DEBUG; API calls are logged by the instrumentation hooks instead
QUIET_LOGGERS = ("botocore", "boto3", "urllib3")


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the package logger.

    Calling this more than once replaces the previously installed handlers.

    Args:
        config: Logging configuration, defaults are used when omitted

    Returns:
        The configured package root logger
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter = logging.Formatter(config.format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file_path:
        handlers.append(logging.FileHandler(config.file_path, encoding="utf-8"))

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
