"""
Logging Configuration for the Projection System.

This module provides structured logging shared by the projection engines
and the validation tools. Engine configuration is logged once at
construction; the transform hot paths never log.
"""

import logging
import sys


# Configure root logger for the package
def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the projection system.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def log_configuration_error(logger: logging.Logger, message: str) -> str:
    """Log a configuration failure and hand the message back for raising.

    Parameters
    ----------
    logger : logging.Logger
        Logger of the module rejecting the configuration.
    message : str
        Description of the invalid parameter.

    Returns
    -------
    str
        The same message, so callers can write
        ``raise ConfigurationError(log_configuration_error(logger, msg))``.
    """
    logger.error(f"CONFIGURATION ERROR | {message}")
    return message
