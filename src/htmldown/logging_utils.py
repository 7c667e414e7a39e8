"""Logging setup for the htmldown command line.

Markdown is written to stdout, so every diagnostic goes to stderr (and
optionally a log file). BeautifulSoup reports questionable input, such as
markup that looks like a file name or URL, through :mod:`warnings`; those are
routed into logging so ``--log-level`` controls them like everything else.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Parser backends that log on their own; they stay quieter than htmldown
# unless debugging.
PARSER_LOGGERS = ("bs4", "html5lib")

BRIEF_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(log_level: int | str) -> int:
    """Turn a level name or number into a numeric level, defaulting to INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure the root logger for one ``htmldown`` run.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Also append log records to this file.
    trace_mode : bool, default False
        Include timestamps and logger names, and let the parser backends log
        at ``log_level`` instead of WARNING.

    Returns
    -------
    logging.Logger
        The configured root logger.

    """
    level = resolve_level(log_level)
    formatter = (
        logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT) if trace_mode else logging.Formatter(BRIEF_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level, formatter))

    parser_level = level if trace_mode else max(level, logging.WARNING)
    for name in PARSER_LOGGERS:
        logging.getLogger(name).setLevel(parser_level)

    # bs4 warnings arrive on the "py.warnings" logger
    logging.captureWarnings(True)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            root_logger.addHandler(_make_handler(file_handler, level, formatter))
            root_logger.debug("Logging to file: %s", log_file)

    return root_logger
