"""
Centralized logging configuration.
All modules obtain their logger through get_logger(__name__); the entry
point calls setup_logging() once.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from config import LOG_LEVEL


def setup_logging(
    log_level: str = LOG_LEVEL,
    log_file: Optional[str] = None,
    max_file_size: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3
) -> logging.Logger:
    """
    Set up application logging with a console handler and optional file.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of a rotating log file, console only when None
        max_file_size: Maximum size of each log file in bytes
        backup_count: Number of backup files to keep

    Returns:
        Configured root logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    # SQLAlchemy is chatty at INFO
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    return logger


def get_logger(name):
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
