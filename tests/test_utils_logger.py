"""Tests for the centralized logging utility."""

import logging
from io import StringIO

import pytest

from casebench.utils.logger import Logger, LoggerNotConfiguredError, LogLevel


def test_logger_unconfigured():
    """Test that using Logger before configuration raises error."""
    Logger._configured = False

    with pytest.raises(LoggerNotConfiguredError):
        Logger.get("test")

    with pytest.raises(LoggerNotConfiguredError):
        Logger.set_level("DEBUG")


def test_logger_configuration():
    """Test logger configuration and record format."""
    output = StringIO()
    Logger.configure(level="DEBUG", output=output, timestamps=False)

    assert Logger.is_configured()

    log = Logger.get("test_config")
    log.debug("Debug message")

    content = output.getvalue()
    assert "DEBUG" in content
    assert "[casebench.test_config]" in content
    assert "Debug message" in content


def test_logger_set_level():
    """Test changing log level."""
    output = StringIO()
    Logger.configure(level="INFO", output=output, timestamps=False)

    log = Logger.get("test_level")
    log.debug("Hidden")
    assert "Hidden" not in output.getvalue()

    Logger.set_level("debug")
    log.debug("Visible")
    assert "Visible" in output.getvalue()


def test_logger_reconfigure_replaces_handler():
    """Test that configure() leaves exactly one handler."""
    Logger.configure(output=StringIO())
    Logger.configure(output=StringIO())

    assert len(logging.getLogger("casebench").handlers) == 1


def test_ensure_configured_keeps_existing_setup():
    """Test ensure_configured() is a no-op once configured."""
    output = StringIO()
    Logger.configure(level="INFO", output=output, timestamps=False)

    Logger.ensure_configured()
    Logger.get("keep").info("still here")

    assert "still here" in output.getvalue()


def test_ensure_configured_when_unconfigured():
    """Test ensure_configured() sets up a WARNING handler."""
    Logger._configured = False

    Logger.ensure_configured()

    assert Logger.is_configured()
    assert logging.getLogger("casebench").level == logging.WARNING


def test_log_level_parse():
    """Test level parsing from names and enum values."""
    assert LogLevel.parse(" warning ") is LogLevel.WARNING
    assert LogLevel.parse(LogLevel.ERROR) is LogLevel.ERROR

    with pytest.raises(ValueError):
        LogLevel.parse("LOUD")


def test_invalid_output():
    """Test that an unusable output raises ValueError."""
    with pytest.raises(ValueError):
        Logger.configure(output=42)  # type: ignore[arg-type]
