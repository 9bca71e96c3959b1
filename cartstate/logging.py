"""
Logging for cartstate.

Importing this module configures nothing: the package logger only carries a
NullHandler, so a host UI keeps control of its own output. Applications that
want cart logs on stdout call `configure_logging()` once (the composition
root in `cartstate.app` does).
"""

import logging
import sys

PACKAGE_LOGGER = "cartstate"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Logger for a cartstate module (pass __name__)."""
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Send cartstate logs to stdout at `level`.

    Safe to call repeatedly: the stream handler is attached once, later
    calls only change the level. Unknown level names fall back to INFO.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(getattr(h, "_cartstate", False) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._cartstate = True
        package_logger.addHandler(handler)

    return package_logger


def loggable_id(value: object, keep: int = 8) -> str:
    """
    Shorten a user-supplied ID for log lines.

    Control characters are escaped so an ID cannot forge extra log entries.
    """
    if not value:
        return "N/A"
    escaped = str(value).encode("unicode_escape").decode("ascii")
    return escaped[:keep]
