"""Centralized logging utilities for adocast entry points.

Library modules only create module-level loggers; handlers are attached here,
by the CLI, so that embedding applications keep control of their own logging.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from adocast.exceptions import ValidationError

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(log_level: int | str) -> int:
    """Translate a level name or number into a numeric logging level.

    Raises
    ------
    ValidationError
        If ``log_level`` is a string that does not name a logging level.

    """
    if isinstance(log_level, int):
        return log_level
    name = str(log_level).upper()
    if name not in LOG_LEVEL_NAMES:
        raise ValidationError(
            f"Unknown log level '{log_level}'. Expected one of: {', '.join(LOG_LEVEL_NAMES)}",
            parameter_name="log_level",
            parameter_value=log_level,
        )
    return int(getattr(logging, name))


_CONSOLE_FORMAT = "adocast: %(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def _make_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(_TRACE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return logging.Formatter(_CONSOLE_FORMAT)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install the CLI's handlers on the root logger.

    Existing root handlers are replaced by a stderr handler and, when
    ``log_file`` is given, a file handler appending to it.

    Parameters
    ----------
    log_level : int | str
        Level number or name, e.g. ``"DEBUG"``
    log_file : str, optional
        File that receives a copy of every record
    trace_mode : bool, default False
        Prefix records with a timestamp and the logger name. Dropped nodes
        are reported at DEBUG level, so this pairs with ``log_level="DEBUG"``.

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = resolve_log_level(log_level)
    formatter = _make_formatter(trace_mode)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            log_file_error = exc

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_file_error is not None:
        root_logger.warning(f"Could not open log file {log_file}: {log_file_error}")
    elif log_file:
        root_logger.info(f"Logging to file: {log_file}")
    return root_logger
