"""
Logging for the solvers and the simulation loop. Messages are prefixed like the
ones Taichi prints itself, so both read as one stream in the terminal.
"""
import logging
import sys

LOGGER_NAME = "mpm2d"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Attaches a single console handler to the 'mpm2d' logger, calling this again
    replaces the handler instead of adding another one.

    Args:
        verbose: log grid and sampler details at DEBUG level, otherwise INFO.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[mpm2d] [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)

    # Handled here, the root logger would print everything a second time:
    logger.propagate = False
    return logger
