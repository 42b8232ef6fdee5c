# LoggingConfig.py
"""
Logging for BubblePie.

Every module logs through `logging.getLogger(__name__)`, so all records end
up under the "BubblePie" logger. The library itself installs no handlers;
applications and demo scripts call `setup_logging` once to see the limit
solves, cache pruning and hidden-chart warnings.
"""

import logging
import sys
from typing import Optional

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route BubblePie records to stdout and, if `log_file` is given, to that
    file (truncated). Handlers from an earlier call are replaced.
    Returns the "BubblePie" logger.
    """
    logger = logging.getLogger("BubblePie")
    logger.setLevel(level)
    for old in list(logger.handlers):
        old.close()
    logger.handlers.clear()

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s", log_file or "stdout")
    return logger
