import logging
import sys

LOGGER_NAME = "inventory_api"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stdout handler to the package logger.

    Safe to call more than once (tests build the app repeatedly); the handler
    is only added the first time.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level.upper())
    if not any(getattr(h, "_inventory_api", False) for h in log.handlers):
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        h._inventory_api = True
        log.addHandler(h)
    log.propagate = True
    return log
