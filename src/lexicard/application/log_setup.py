import logging
import sys

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def level_for(verbose: int) -> int:
    """Map a verbosity count to a logging level (0 quiet, 1 normal, 2+ debug)."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbose: int = 1) -> None:
    level = level_for(verbose)
    # No-op if the host already configured the root logger
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("lexicard").setLevel(level)
