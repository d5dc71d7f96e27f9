# topmark:header:start
#
#   project      : ECResolve
#   file         : logging.py
#   file_relpath : src/ecresolve/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ECResolve logging with a TRACE level below DEBUG.

The resolver reports what it discovers while walking a directory hierarchy
(config files, root boundaries, skipped sections, unreadable files). Those
messages go through the standard `logging` module, extended here with:

    * a custom TRACE level used for per-section match decisions and cache hits,
    * an [`EcresolveLogger`][ecresolve.config.logging.EcresolveLogger] class
      exposing `trace()`,
    * a [`ChalkFormatter`][ecresolve.config.logging.ChalkFormatter] that colors
      records by severity, and
    * an environment override (``ECRESOLVE_LOG_LEVEL``) honored by
      [`setup_logging`][ecresolve.config.logging.setup_logging].

Host applications that configure logging themselves never need to call
`setup_logging()`; the loggers simply propagate to whatever handlers exist.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from ecresolve.constants import ENV_LOG_LEVEL

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5


class EcresolveLogger(logging.Logger):
    """Logger class adding a `trace()` method for the TRACE level."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Arguments merged into ``msg`` using string formatting.
            extra (Mapping[str, object] | None): Optional extra attributes for the record.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

logging.setLoggerClass(EcresolveLogger)


LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

# Lowest threshold first; the first entry whose level is <= the record level wins.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)

_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each record according to its severity."""

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` and wrap the result in the color for its level.

        Args:
            record (logging.LogRecord): The record to format.

        Returns:
            str: The colorized message.
        """
        message: str = super().format(record)
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(message)
        # Below TRACE
        return chalk.dim(message)


def parse_log_level(value: str | None) -> int | None:
    """Translate a level name or number into a logging level.

    Args:
        value (str | None): A level name such as ``"TRACE"`` or ``"debug"``, or a
            numeric string such as ``"10"``.

    Returns:
        int | None: The numeric level, or None when ``value`` is empty or unknown.
    """
    if not value:
        return None
    v: str = value.strip().upper()
    if v.isdigit():
        return int(v)
    return _LEVEL_NAMES.get(v)


def resolve_env_log_level() -> int | None:
    """Return the logging level requested through ``ECRESOLVE_LOG_LEVEL``, if any."""
    return parse_log_level(os.environ.get(ENV_LOG_LEVEL))


def setup_logging(level: int | None = None) -> None:
    """Configure the root logger with colored output on stderr.

    Args:
        level (int | None): Level to apply. When None, ``ECRESOLVE_LOG_LEVEL`` is
            consulted and CRITICAL is used when it is unset.
    """
    if level is None:
        level = resolve_env_log_level()
        if level is None:
            level = logging.CRITICAL

    root_logger: logging.Logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace existing handlers so repeated calls don't duplicate output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root_logger.addHandler(handler)


def get_logger(name: str) -> EcresolveLogger:
    """Return the `EcresolveLogger` registered under ``name``.

    Args:
        name (str): The logger name, usually ``__name__``.

    Returns:
        EcresolveLogger: The logger instance.
    """
    return cast("EcresolveLogger", logging.getLogger(name))
