"""Unit tests for the logging configuration."""

import logging

import pytest
from dockerflow.logging import JsonLogFormatter

from searchindex.config_logging import configure_logging
from searchindex.configs import settings


@pytest.fixture(name="restore_logging")
def fixture_restore_logging():
    """Restore the logging settings and the package logger after a test."""
    old_format = settings.logging.format
    logger = logging.getLogger("searchindex")
    old_handlers, old_propagate, old_level = logger.handlers[:], logger.propagate, logger.level
    yield
    settings.logging.format = old_format
    logger.handlers = old_handlers
    logger.propagate = old_propagate
    logger.setLevel(old_level)


def test_invalid_format(restore_logging):
    settings.logging.format = "invalid"

    with pytest.raises(ValueError) as excinfo:
        configure_logging()

    assert "Invalid log format:" in str(excinfo)


def test_mozlog_format(restore_logging):
    settings.logging.format = "mozlog"

    configure_logging()

    handlers = logging.getLogger("searchindex").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JsonLogFormatter)


def test_pretty_format(restore_logging):
    settings.logging.format = "pretty"

    configure_logging()

    handlers = logging.getLogger("searchindex").handlers
    assert [type(handler).__name__ for handler in handlers] == ["RichHandler"]
    assert logging.getLogger("searchindex").propagate is settings.logging.can_propagate
