import logging
import sys

LOGGER_NAME = "storefront"

def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level."""
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level.upper())
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s"
        ))
        log.addHandler(handler)
    log.propagate = False
    return log

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
