"""
Logging configuration for the portfolio backend.

Creates rotating file-based loggers under logs/ (override with LOG_DIR).
"""

import logging
import os
from pathlib import Path
from logging.handlers import RotatingFileHandler

# logs directory (<project root>/logs)
DEFAULT_LOG_DIR = Path(__file__).resolve().parents[2] / "logs"

APP_LOG_FILE_NAME = "portfolio.log"
CLIENT_LOG_FILE_NAME = "settings_client.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def _log_dir() -> Path:
    log_dir = Path(os.getenv("LOG_DIR", str(DEFAULT_LOG_DIR)))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _setup_file_logger(name: str, log_file: Path, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Avoid duplicate handlers if setup_logging is called multiple times
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    # Don't double-log through parent loggers
    logger.propagate = False
    return logger


def setup_logging() -> None:
    """
    Configure root + service loggers for the portfolio backend.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)
    log_dir = _log_dir()

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Service loggers
    _setup_file_logger("portfolio", log_dir / APP_LOG_FILE_NAME, level)
    _setup_file_logger("portfolio.clients", log_dir / CLIENT_LOG_FILE_NAME, level)

    # Keep SQLAlchemy logs informative but not too noisy
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Convenience wrapper to get a named logger.
    """
    return logging.getLogger(name)
