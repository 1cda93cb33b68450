"""Log output setup for command-line use.

Library modules only create loggers under the ``pokerdecide`` namespace;
attaching handlers is left to the application.
"""

import logging

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Send ``pokerdecide`` logs to stderr at ``level``. Safe to call repeatedly."""
    logger = logging.getLogger("pokerdecide")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
