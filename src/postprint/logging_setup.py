"""Logging configuration for the CLI and the web server."""

import logging
from typing import Optional, Union

from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# Third-party loggers that are chatty at INFO/WARNING
QUIET_LOGGERS = ("weasyprint", "fontTools")


def _normalise_level(level: Optional[Union[str, int]]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = level.strip().upper()
        if value.isdigit():
            return int(value)
        mapped = logging.getLevelName(value)
        if isinstance(mapped, int):
            return mapped
    return logging.INFO


def configure_logging(
    level: Optional[Union[str, int]] = None,
    rich_console: bool = True,
) -> int:
    """
    Configure root logging.

    Args:
        level: Level name or number; defaults to INFO
        rich_console: Use Rich's console handler (CLI) instead of a plain
            timestamped stream handler (server)

    Returns:
        The effective log level
    """
    log_level = _normalise_level(level)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    if rich_console:
        logging.basicConfig(
            level=log_level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        )
    else:
        logging.basicConfig(
            level=log_level,
            format=LOG_FORMAT,
            handlers=[logging.StreamHandler()],
        )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    return log_level
