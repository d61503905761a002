"""
Centralized logging configuration for the DocShelf backend.

Every module logs through get_logger(__name__). setup_logging() is called
once by the application entry point; nothing is configured on import.

Environment:
    LOG_LEVEL: Console level (default INFO)
    LOG_DIR: Directory for the log file (default ./logs)
    LOG_TO_FILE: "false" disables the file handler
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE_NAME = "docshelf.log"

# File logging is on unless explicitly disabled
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"

# Rotate at 5 MB, keep 3 old files
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

CONSOLE_FORMAT = logging.Formatter(
    fmt='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    datefmt='%H:%M:%S'
)

FILE_FORMAT = logging.Formatter(
    fmt='%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Third-party loggers and the level they are capped at
LIBRARY_LEVELS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.INFO,
    "uvicorn.error": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "multipart": logging.WARNING,
    "slowapi": logging.WARNING,
}


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    enable_file_logging: bool = LOG_TO_FILE
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path (defaults to LOG_DIR/docshelf.log)
        enable_file_logging: Whether to also write a rotating log file
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if enable_file_logging else numeric_level)

    # Remove existing handlers to avoid duplicates on re-configuration
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(CONSOLE_FORMAT)
    root_logger.addHandler(console_handler)

    if enable_file_logging:
        path = Path(log_file) if log_file else LOG_DIR / LOG_FILE_NAME
        path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)  # File gets all logs
        file_handler.setFormatter(FILE_FORMAT)
        root_logger.addHandler(file_handler)

    for name, level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically __name__)."""
    return logging.getLogger(name)
