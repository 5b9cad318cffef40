"""Logging setup built on loguru."""

import sys
from pathlib import Path

from loguru import logger

_DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>\n{exception}"
)
# Unbound loggers (e.g. the host's) carry no extra name; use the emitting module
_UNBOUND_FORMAT = _DEFAULT_FORMAT.replace("{extra[name]}", "{name}")


def _format(record) -> str:
    return _DEFAULT_FORMAT if "name" in record["extra"] else _UNBOUND_FORMAT


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    """Configure loguru sinks for the application.

    Args:
        level: Minimum log level (loguru level name)
        log_file: Optional path of a rotating log file
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=_format)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            level=level,
            format=_format,
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
        )


def get_logger(name: str):
    """Get a logger bound to a module name."""
    return logger.bind(name=name)
