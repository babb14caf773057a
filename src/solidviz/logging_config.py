"""Console and file handlers for the ``solidviz`` logger.

Library modules only call ``logging.getLogger(__name__)``; nothing is
emitted until an application (the CLI, a test, a notebook) calls
``setup_logging``. Records go to stderr so that command output on stdout
stays machine readable.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Route ``solidviz.*`` records at ``level`` and above to stderr and, optionally, ``log_file``.

    Calling it again replaces the handlers from the previous call.
    """
    logger = logging.getLogger("solidviz")
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("logging to stderr%s at %s",
                 f" and {log_file}" if log_file else "", logging.getLevelName(level))
    return logger


def parse_level(name) -> int:
    """Translate ``'debug'``, ``'INFO'`` etc. (or an int) to a logging level."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name!r}")
    return level
