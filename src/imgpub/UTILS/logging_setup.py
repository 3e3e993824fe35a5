"""
Logging configuration for the step's output in CI logs.
"""
import logging
import sys

ROOT_LOGGER = "imgpub"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configures the package logger to write plain lines to stdout.

    CI runners timestamp every line themselves, so none is added here.

    :param verbose: Log debug messages as well.
    :return: The package logger.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Replace earlier handlers, sys.stdout may have been swapped since
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
