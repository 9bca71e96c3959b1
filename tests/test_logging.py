"""Tests for logging helpers"""
import logging

from cartstate.logging import PACKAGE_LOGGER, configure_logging, get_logger, loggable_id


def _stream_handlers():
    return [
        h for h in logging.getLogger(PACKAGE_LOGGER).handlers
        if isinstance(h, logging.StreamHandler)
    ]


def test_import_adds_no_output_handler():
    assert any(isinstance(h, logging.NullHandler) for h in logging.getLogger(PACKAGE_LOGGER).handlers)


def test_module_loggers_live_under_package():
    assert get_logger("cartstate.cart.store").parent.name in (PACKAGE_LOGGER, "cartstate.cart")


def test_configure_logging_is_idempotent():
    configure_logging("debug")
    package_logger = configure_logging("warning")

    assert len(_stream_handlers()) == 1
    assert package_logger.level == logging.WARNING


def test_configure_logging_unknown_level():
    assert configure_logging("chatty").level == logging.INFO


def test_loggable_id_truncates():
    assert loggable_id("user-123456789") == "user-123"


def test_loggable_id_escapes_newlines():
    assert loggable_id("a\nb") == "a\\nb"


def test_loggable_id_empty():
    assert loggable_id(None) == "N/A"
    assert loggable_id("") == "N/A"
