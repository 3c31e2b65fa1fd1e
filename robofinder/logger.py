# === FILE: robofinder/logger.py ===
"""Project-wide logging configuration for **RoboFinder**.

Highlights
----------
* Console lines carry the classic recon-tool prefixes instead of level names:
  ``[+]`` for progress, ``[-]`` for failures and notices, ``[DEBUG]`` for
  verbose diagnostics.
* Optional log file (with rotation) keeps the timestamped format.
* Single, importable instance :data:`logger` – simply::

      from robofinder.logger import logger
      logger.info("Found [%d] Timestamps.", 3)
* Re-configurable at runtime via :func:`configure` / :func:`init_logging`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Final, Union

# --------------------------------------------------------------------------- #
# Constants & basic types                                                     #
# --------------------------------------------------------------------------- #

_CONSOLE_FORMAT: Final[str] = "%(message)s"
_FILE_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "RoboFinder"

#: level used in silent mode; nothing the project logs reaches it
SILENT: Final[int] = logging.CRITICAL + 10

_PREFIXES: Final[Dict[int, str]] = {
    logging.DEBUG: "[DEBUG] ",
    logging.INFO: "[+] ",
}
_FAILURE_PREFIX: Final[str] = "[-] "

_LevelT = Union[int, str]


class PrefixFormatter(logging.Formatter):
    """Prepend ``[DEBUG]`` / ``[+]`` / ``[-]`` depending on the record level."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = _PREFIXES.get(record.levelno, _FAILURE_PREFIX)
        return prefix + super().format(record)


# --------------------------------------------------------------------------- #
# Helper builders                                                             #
# --------------------------------------------------------------------------- #


def _stdout_handler(fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(PrefixFormatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _CONSOLE_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the global project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a logfile. *None* → console-only output.
    log_format
        Format string for the console formatter (prefix is added on top).
    replace_handlers
        *True* – remove existing handlers; *False* – just append new one(s).
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in lg.handlers:
            handler.close()
        lg.handlers.clear()

    lg.addHandler(_stdout_handler(log_format))

    if log_file is not None:
        lg.addHandler(_file_handler(log_file, _FILE_FORMAT))

    lg.propagate = False
    return lg


def level_for(*, silent: bool = False, verbose: bool = False) -> int:
    """Map the ``-s`` / ``-v`` switches onto a logging level."""
    if silent:
        return SILENT
    if verbose:
        return logging.DEBUG
    return logging.INFO


def init_logging(
    *, silent: bool = False, verbose: bool = False, log_file: str | Path | None = None
) -> logging.Logger:
    """Configure the logger from the CLI switches."""
    return configure(
        level=level_for(silent=silent, verbose=verbose),
        log_file=log_file,
        replace_handlers=True,
    )


# --------------------------------------------------------------------------- #
# Ready-to-use instance                                                       #
# --------------------------------------------------------------------------- #

logger: logging.Logger = configure()

__all__ = ["logger", "configure", "init_logging", "level_for", "PrefixFormatter", "SILENT"]
