"""Logger module."""

import logging
import sys

import colorlog

loggers: dict[str, logging.Logger] = {}

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _make_formatter(log_color: bool) -> logging.Formatter:
    if not log_color:
        return logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    return colorlog.ColoredFormatter(
        "%(log_color)s %(asctime)s - %(name)s - %(levelname)s - %(message)s",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    )


def get_logger(
    name: str,
    log_handler: str = "stdout",
    log_level: str = "INFO",
    log_color: bool = False,
) -> logging.Logger:
    """Get logger.

    Args:
        name: The name of the logger.
        log_handler: The log handler type ('stdout' or 'stderr').
        log_level: The logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
        log_color: Whether to use colored output.

    Returns:
        logging.Logger: Configured logger instance.

    Raises:
        ValueError: If invalid handler or log level is provided.
    """
    if name in loggers:
        return loggers[name]

    streams = {"stdout": sys.stdout, "stderr": sys.stderr}
    if log_handler not in streams:
        err_msg = f"Invalid handler: {log_handler}"
        raise ValueError(err_msg)

    if log_level.upper() not in LOG_LEVELS:
        err_msg = f"Invalid log level: {log_level}"
        raise ValueError(err_msg)

    level = LOG_LEVELS[log_level.upper()]

    logger = logging.getLogger(name) if not log_color else colorlog.getLogger(name)
    handler = (
        logging.StreamHandler(streams[log_handler])
        if not log_color
        else colorlog.StreamHandler(streams[log_handler])
    )

    logger.setLevel(level)
    handler.setLevel(level)

    handler.setFormatter(_make_formatter(log_color))
    logger.addHandler(handler)

    loggers[name] = logger
    return logger


def set_log_level(log_level: str) -> None:
    """Change the level of every logger created through get_logger.

    Args:
        log_level: The new logging level name.

    Raises:
        ValueError: If the log level is unknown.
    """
    if log_level.upper() not in LOG_LEVELS:
        err_msg = f"Invalid log level: {log_level}"
        raise ValueError(err_msg)

    level = LOG_LEVELS[log_level.upper()]
    for logger in loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def set_log_color(log_color: bool) -> None:
    """Switch coloured output on or off for every logger created through get_logger.

    Args:
        log_color: Whether to use colored output.
    """
    for logger in loggers.values():
        for handler in logger.handlers:
            handler.setFormatter(_make_formatter(log_color))


__all__ = [
    "LOG_LEVELS",
    "get_logger",
    "set_log_color",
    "set_log_level",
]
