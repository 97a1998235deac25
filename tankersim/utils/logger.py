"""Logging setup shared by all simulator components."""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "tankersim"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str,
    level: Optional[Union[str, int]] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Get a logger under the package namespace.

    The stream handler is attached once, to the namespace root; component
    loggers propagate to it.

    Args:
        name: Logger name, usually the class name of the caller
        level: Optional level ("DEBUG", "INFO", ...) applied to this logger
        log_file: Optional file to additionally write records to

    Returns:
        Configured logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger
