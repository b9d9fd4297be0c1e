"""Shared logger for the query runner.

Log records go to stderr so they never interleave with the query results
printed on stdout.
"""

import logging
import sys

from bookstore_queries.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("bookstore_queries")


def setup_logging(debug_mode: bool = False) -> None:
    """Attach a stderr handler once and set the level.

    ``debug_mode`` forces DEBUG; otherwise ``LOG_LEVEL`` from the environment
    is used.
    """
    level = logging.DEBUG if debug_mode else getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    # avoid duplicate handlers when called more than once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        # records are written here only, not again by a root handler
        logger.propagate = False
    logger.setLevel(level)
