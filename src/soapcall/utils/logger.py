# soapcall/utils/logger.py
"""Package-level logging setup for soapcall."""

import logging
from pathlib import Path
from sys import stdout

from .config_loader import LoggingSection

PACKAGE_LOGGER_NAME: str = 'soapcall'

LOG_FORMAT: str = '%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    logging_level: int = logging.INFO,
    log_file_path: Path | None = None,
) -> logging.Logger:
    """
    Configure the 'soapcall' logger that every module logger propagates to.

    The first call attaches one handler (a file handler when log_file_path
    is given, stdout otherwise). Later calls only change the level.

    Args:
        logging_level: Level for the logger and its handler.
        log_file_path: Optional log file; parent directories are created.

    Returns:
        The package logger.
    """
    package_logger: logging.Logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(logging_level)

    if package_logger.handlers:
        for existing_handler in package_logger.handlers:
            existing_handler.setLevel(logging_level)
        return package_logger

    handler: logging.Handler
    if log_file_path is not None:
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file_path, mode='a', encoding='utf-8')
    else:
        handler = logging.StreamHandler(stdout)

    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.setLevel(logging_level)
    package_logger.addHandler(handler)

    if log_file_path is not None:
        package_logger.info('Logging to file: %s', log_file_path)

    return package_logger


def setup_logger_from_config(logging_config: LoggingSection) -> logging.Logger:
    """Set up logging from a config's 'logging' section."""
    file_level: int | None = logging_config.get_file_level_int()

    if logging_config.file_path is not None and file_level is not None:
        return setup_logger(file_level, logging_config.file_path)

    return setup_logger(logging_config.get_console_level_int())
