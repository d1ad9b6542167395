"""Logging configuration module for logicgraph."""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "logicgraph"


def setup_logging(level=None, debug=False, stdout=True):
    """Sets up the logicgraph logger.

    Sets the package logger up at the given level with a coloured console
    handler.

    Args:
        level (logging.LEVEL): The level to log at.
        debug (bool): Set log level to debug if level is not set.
        stdout (bool): Enable console logging.

    Returns:
        logging.Logger: The configured package logger.
    """
    log_level = logging.INFO
    if level:
        log_level = level
    elif debug or os.environ.get("LOGICGRAPH_DEBUG") == "1":
        log_level = logging.DEBUG

    try:
        logger = logging.getLogger(LOGGER_NAME)

        if stdout and not any(isinstance(h, RichHandler) for h in logger.handlers):
            handler = RichHandler(
                console=Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
            )
            handler.setLevel(log_level)
            handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
            logger.addHandler(handler)
        for handler in logger.handlers:
            handler.setLevel(log_level)

        logger.setLevel(log_level)
        # Turn off propagation to avoid double console prints
        logger.propagate = False

        return logger

    except Exception as exc:
        sys.stderr.write("Error initializing logger: {0}\n".format(str(exc)))
        # Return a basic logger as fallback
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(log_level)
        return logger
