"""
Logging setup for scripts using the sillflow package.
"""

import logging
import sys

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool = False, very_verbose: bool = False) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    INFO (verbose) and DEBUG (very_verbose) go to stdout, otherwise only
    warnings are shown, on stderr.
    """
    logger = logging.getLogger('sillflow')

    if very_verbose:
        logger.setLevel(logging.DEBUG)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.DEBUG)
    elif verbose:
        logger.setLevel(logging.INFO)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.WARNING)

    ch.setFormatter(logging.Formatter(FORMAT))

    # Replace any handler added by an earlier call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(ch)
    return logger
