"""
Logging Configuration

One handler on the package logger covers the whole sync pipeline:
catalog_sync.sync.* (pager, resolver, exporter), catalog_sync.stores.*
and catalog_sync.delivery.* all propagate to it. Records go to stderr so
the sync summary printed on stdout stays clean.
"""

import logging
import sys

LOGGER_NAME = "catalog_sync"
LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure the package logger for a sync run.

    Args:
        verbose: If True, set level to DEBUG (per-page queries, accepted batches)
        quiet: If True, set level to WARNING (skipped items, retries, failures)

    Returns:
        The configured package logger
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running a sync in the same process must not duplicate output
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
