"""Logging configuration for the harbormaster package."""
import logging
import sys

from harbormaster.config import Config


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Set up a logger with the specified name and log level.

    Args:
        name: The name of the logger
        level: The logging level (default: logging.INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Don't add handlers if they're already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)

        formatter = logging.Formatter(Config.LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
        handler.setFormatter(formatter)

        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)

    return logger


def level_for(verbose: bool = False, debug: bool = False) -> int:
    """Map the CLI verbosity switches onto a logging level."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return getattr(logging, Config.LOG_LEVEL, logging.WARNING)
