"""
Logging configuration for RepairWorks.

Everything logs under the "repairworks" logger (app.logger and the module
loggers beneath it), through Flask's default stderr handler.
"""

import logging

from flask import Flask
from flask.logging import default_handler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(app: Flask) -> logging.Logger:
    """
    Set level and format of the application logger.

    Args:
        app: Flask application; LOG_LEVEL is read from its config

    Returns:
        The configured application logger
    """
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    default_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger = app.logger
    logger.setLevel(level)

    return logger
