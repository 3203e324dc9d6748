"""Shared pytest fixtures."""

from io import StringIO

import pytest

from casebench.utils.logger import Logger


@pytest.fixture(autouse=True)
def captured_log():
    """Route casebench logging to a buffer for every test."""
    output = StringIO()
    Logger.configure(level="DEBUG", output=output, timestamps=False)
    return output
