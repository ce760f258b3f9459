"""
Logging Configuration Module
============================

Centralized logging setup for autoapt.

Progress of the multi-region scan, web view request lines and error
summaries all go through the standard ``logging`` module; this module
routes them to a Rich console handler on stderr and, optionally, to a
plain-text log file.

Functions
---------
setup_logging
    Configure application-wide logging.

Example
-------
>>> import logging
>>> from autoapt.core.logging import setup_logging
>>>
>>> setup_logging(level="INFO", log_file="autoapt.log")
>>> logger = logging.getLogger(__name__)
>>> logger.info("Scanning region %s", "us-east-1")

See Also
--------
rich.logging : Rich library's logging handler.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every HTTP call at INFO/DEBUG
NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    rich_tracebacks: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Configure application-wide logging.

    Parameters
    ----------
    level : str or int, default="INFO"
        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    log_file : str, optional
        Path to a log file. When given, records are also written there
        with timestamps and the emitting thread name, which makes the
        interleaving of region workers readable.
    rich_tracebacks : bool, default=True
        Whether to use Rich for exception tracebacks.
    console : Console, optional
        Rich Console instance. Defaults to a new stderr console.

    Notes
    -----
    Replaces any handlers already installed on the root logger, so calling
    it twice does not duplicate output.
    """
    level = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=rich_tracebacks,
        tracebacks_show_locals=False,
        markup=False,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Werkzeug installs its own stream handler unless the root has one;
    # keep its request lines flowing through ours.
    werkzeug_logger = logging.getLogger("werkzeug")
    werkzeug_logger.handlers.clear()
    werkzeug_logger.setLevel(logging.INFO)

    root_logger.debug(
        "Logging configured: level=%s, file=%s",
        logging.getLevelName(level),
        log_file or "None",
    )
