"""Tests for package logging setup."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from soapcall.utils.config_loader import LoggingSection
from soapcall.utils.logger import (
    PACKAGE_LOGGER_NAME,
    setup_logger,
    setup_logger_from_config,
)


@pytest.fixture(autouse=True)
def clean_package_logger() -> Iterator[logging.Logger]:
    """Remove handlers added to the package logger by each test."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    saved_handlers = list(package_logger.handlers)
    saved_level = package_logger.level
    package_logger.handlers.clear()

    yield package_logger

    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers[:] = saved_handlers
    package_logger.setLevel(saved_level)


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_console_handler(self) -> None:
        """Test that a single stdout handler is attached."""
        package_logger = setup_logger(logging.WARNING)

        assert package_logger.name == 'soapcall'
        assert package_logger.level == logging.WARNING
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], logging.StreamHandler)

    def test_repeated_setup_updates_level(self) -> None:
        """Test that setting up twice changes the level without a new handler."""
        setup_logger(logging.INFO)
        package_logger = setup_logger(logging.DEBUG)

        assert len(package_logger.handlers) == 1
        assert package_logger.handlers[0].level == logging.DEBUG

    def test_file_handler(self, tmp_path: Path) -> None:
        """Test logging to a file in a directory that does not exist yet."""
        log_file = tmp_path / 'logs' / 'soapcall.log'

        package_logger = setup_logger(logging.DEBUG, log_file)
        logging.getLogger('soapcall.method_call').debug('hello')

        assert isinstance(package_logger.handlers[0], logging.FileHandler)
        assert 'hello' in log_file.read_text(encoding='utf-8')


class TestSetupLoggerFromConfig:
    """Tests for setup_logger_from_config."""

    def test_console_level(self) -> None:
        """Test that the console level is used without a file."""
        package_logger = setup_logger_from_config(LoggingSection(console_level='ERROR'))
        assert package_logger.level == logging.ERROR

    def test_file_logging(self, tmp_path: Path) -> None:
        """Test that a file path switches to file logging at the file level."""
        section = LoggingSection(file_path=tmp_path / 'soapcall.log', file_level='WARNING')

        package_logger = setup_logger_from_config(section)

        assert package_logger.level == logging.WARNING
        assert isinstance(package_logger.handlers[0], logging.FileHandler)
