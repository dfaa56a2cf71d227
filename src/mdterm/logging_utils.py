#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/logging_utils.py
"""Logging setup for the mdterm command-line interface.

The library itself only creates module loggers under ``mdterm``; handlers are
installed by :func:`configure_logging`, which the CLI calls once per run.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "mdterm"

# httpx logs every request at INFO and PIL logs plugin imports at DEBUG
NOISY_LOGGERS = {"httpx": logging.WARNING, "httpcore": logging.WARNING, "PIL": logging.INFO}

_HANDLER_MARK = "_mdterm_handler"


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the ``mdterm`` logger.

    Rendered output goes to stdout, so log records always go to stderr.
    Handlers installed by an earlier call are replaced; handlers added by
    anyone else are left alone.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path of a file that receives a copy of every record.
    trace_mode : bool, default False
        Emit timestamps and logger names, and let the HTTP and imaging
        libraries log at the same level as mdterm.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved_level)
    third_party = [logging.getLogger(name) for name in NOISY_LOGGERS]
    for target in [package_logger, *third_party]:
        for handler in [h for h in target.handlers if getattr(h, _HANDLER_MARK, False)]:
            target.removeHandler(handler)
            handler.close()

    if trace_mode:
        formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            print(f"Warning: could not open log file {log_file}: {exc}", file=sys.stderr)

    for handler in handlers:
        handler.setLevel(resolved_level)
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARK, True)
        package_logger.addHandler(handler)

    for target, quiet_level in zip(third_party, NOISY_LOGGERS.values()):
        if trace_mode:
            target.setLevel(resolved_level)
            for handler in handlers:
                target.addHandler(handler)
        else:
            target.setLevel(max(resolved_level, quiet_level))

    if log_file and len(handlers) > 1:
        package_logger.info(f"Logging to file: {log_file}")

    return package_logger
