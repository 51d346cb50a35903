"""
Logging Configuration
Sets up the package logger used by the codec, the arithmetic engine and the shell.
"""
import logging
import sys
from typing import Optional


def setup_logging(level=logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'sparse_arith' namespace.

    Args:
        level: Logging level, either a number (logging.DEBUG) or a level name ('DEBUG').
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger("sparse_arith")
    logger.setLevel(level)

    # Avoid duplicate handlers when the shell is started more than once in a process
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    target = f"stdout and {log_file}" if log_file else "stdout"
    logger.debug(f"Logging at {logging.getLevelName(level)} to {target}")
    return logger
