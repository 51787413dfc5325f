"""
esoperator Logger
=================

This module provides the loggers used by esoperator, pre-configured with a
consistent format and log level.

Usage
-----

.. code-block:: python

    from esoperator.logger import logger

    logger.info("Resolving node es-node-1")

Configuration
-------------

- The log level can be set via the environment variable ``ESOPERATOR_LOG_LEVEL`` (default: ``INFO``).
- The logger outputs to the standard error stream.
- Only one handler is attached to prevent duplicate logs when imported multiple times.
"""

import logging
import os


def get_logger(name: str = "esoperator") -> logging.Logger:
    """
    Returns a configured logger instance.
    """
    logger = logging.getLogger(name)

    # Only configure if it has no handlers (prevents duplicate logs)
    if not logger.hasHandlers():
        log_level = os.getenv("ESOPERATOR_LOG_LEVEL", "INFO").upper()
        logger.setLevel(log_level)

        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


# Singleton logger instance
logger = get_logger()
