"""Logging setup shared by the app entrypoint and the analytics services."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str = "backend", level: int | str = logging.INFO) -> logging.Logger:
    """
    Configure the package logger with a single console handler.

    Calling it again returns the same logger without stacking handlers, so
    the app and tests can both call it safely.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
