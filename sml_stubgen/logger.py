"""
Logging configuration for the stub generator.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "sml_stubgen",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_file: Optional file path for logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # setup_logger runs at import time and again from the CLI, so only the
    # level changes on later calls
    if logger.handlers:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        if log_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
            logger.addHandler(_file_handler(log_file, level))
        return logger

    logger.setLevel(level)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(_formatter())
    logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        logger.addHandler(_file_handler(log_file, level))

    return logger


def _formatter() -> logging.Formatter:
    # Format: timestamp - module - level - message
    return logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def _file_handler(log_file: str, level: int) -> logging.FileHandler:
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(_formatter())
    return file_handler


# Default logger instance, created once at import time
logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a pipeline stage.

    Child loggers (e.g. "sml_stubgen.extractor") inherit the package logger's
    handlers and level; the name in each record shows which stage wrote it.

    Args:
        module_name: Name of the module (e.g., 'extractor', 'emitter')

    Returns:
        Child logger instance
    """
    return logging.getLogger(f"sml_stubgen.{module_name}")
