"""
Tests for logging setup.
"""

import logging

import pytest
from rich.logging import RichHandler

from docx_composer.utils.logger import get_logger, setup_logging


class TestLogger:
    """Test logger helpers."""

    def test_get_logger(self):
        assert get_logger("docx_composer.layout").name == "docx_composer.layout"

    def test_get_logger_requires_name(self):
        with pytest.raises(ValueError):
            get_logger("")

    def test_setup_logging_plain(self):
        logger = setup_logging("DEBUG", rich=False)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], RichHandler)

    def test_setup_logging_rich(self):
        logger = setup_logging("info")
        assert logger.level == logging.INFO
        assert isinstance(logger.handlers[0], RichHandler)

    def test_setup_logging_replaces_handlers(self):
        setup_logging("INFO", rich=False)
        logger = setup_logging("INFO", rich=False)
        assert len(logger.handlers) == 1

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            setup_logging("LOUD")
