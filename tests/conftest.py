import logging

import pytest


@pytest.fixture(autouse=True)
def solidviz_logger():
    """Undo any handlers or level the CLI installs on the package logger."""
    logger = logging.getLogger("solidviz")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
