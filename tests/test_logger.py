"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from mdproof.utils import configure_logging, get_logger


class TestConfigureLogging:
    def test_rich_handler(self):
        handler = configure_logging("DEBUG")

        assert isinstance(handler, RichHandler)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger().handlers == [handler]

    def test_plain_handler(self):
        handler = configure_logging("warning", use_rich=False)

        assert not isinstance(handler, RichHandler)
        assert logging.getLogger().level == logging.WARNING

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")


class TestGetLogger:
    def test_returns_named_logger(self):
        assert get_logger("mdproof.test").name == "mdproof.test"

    def test_rejects_empty_name(self):
        with pytest.raises(ValueError):
            get_logger("")
