"""
Logging setup for the Bus Booking client.

Console output always; a rotating log file unless running in testing mode.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from config import AppConfig

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'


def configure_logging(config: AppConfig, logger_name: str = None) -> logging.Logger:
    """
    Attach console and file handlers to a logger.

    Args:
        config: Application configuration providing level and file settings
        logger_name: Logger to configure (root logger when None)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logger.setLevel(level)

    # Re-running setup must not duplicate output
    for handler in list(logger.handlers):
        if getattr(handler, '_booking_handler', False):
            logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console_handler._booking_handler = True
    logger.addHandler(console_handler)

    if not config.testing and config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler._booking_handler = True
        logger.addHandler(file_handler)
        logger.info('Bus Booking client logging to %s', config.log_file)

    return logger
