"""
Logging configuration — one-time setup for the sysinstall CLI.

User-facing install progress goes through ``click.echo``; the logging
tree carries diagnostics (download percentages, sudo fallbacks,
directory warnings).  Every module does
``logger = logging.getLogger(__name__)`` and inherits this config.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  SYSINSTALL_LOG_LEVEL  >  WARNING

Optional file output via SYSINSTALL_LOG_FILE / SYSINSTALL_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "SYSINSTALL_LOG_LEVEL"
LOG_FILE_ENV = "SYSINSTALL_LOG_FILE"
LOG_FILE_LEVEL_ENV = "SYSINSTALL_LOG_FILE_LEVEL"

# (format, datefmt) per console verbosity
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    logging.WARNING: ("%(levelname)s: %(message)s", None),
}

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are noisy at INFO
_NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to WARNING.
        log_file: Optional path to a log file, always written in full format.
        log_file_level: Level for the log file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    if console_level <= logging.DEBUG:
        fmt, datefmt = _CONSOLE_FORMATS[logging.DEBUG]
    elif console_level <= logging.INFO:
        fmt, datefmt = _CONSOLE_FORMATS[logging.INFO]
    else:
        fmt, datefmt = _CONSOLE_FORMATS[logging.WARNING]

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    root_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)

    root.setLevel(root_level)

    if console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant; WARNING for anything unrecognized."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
