"""
Logging utilities for consistent logging across the package.

Modules log through ``logging.getLogger(__name__)``; this module configures the
package logger once (format, handlers, level) so that output from the
translator and the stratified builder looks the same everywhere.

Usage
-----
>>> from gtstyle.logging_utils import setup_logging
>>> logger = setup_logging()
>>> logger.info("Rendering table...")
"""

import logging
import os
import sys
from pathlib import Path

from .constants import CONFIG


def _get_log_level_from_env():
    """
    Get logging level from GTSTYLE_LOG_LEVEL environment variable.

    Returns
    -------
    int
        logging.DEBUG, logging.INFO, logging.WARNING, or logging.ERROR
        Defaults to logging.INFO if not set or invalid

    Examples
    --------
    export GTSTYLE_LOG_LEVEL=DEBUG    # Per-call translator output
    export GTSTYLE_LOG_LEVEL=INFO     # Normal operation (default)
    export GTSTYLE_LOG_LEVEL=WARNING  # Quiet mode
    """
    level_str = os.environ.get(CONFIG['LOG_LEVEL_ENV'], 'INFO').upper()
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
    }
    return level_map.get(level_str, logging.INFO)


def setup_logging(log_file=None, level=None, console=True):
    """
    Set up the package logger with consistent formatting for file and console.

    Parameters
    ----------
    log_file : str or Path, optional
        File to write (truncated; parent directories are created).
    level : int, optional
        Defaults to the GTSTYLE_LOG_LEVEL environment variable, else INFO.
    console : bool, default=True
        Also write to stdout.

    Returns
    -------
    logging.Logger
        The configured 'gtstyle' logger

    Notes
    -----
    Module loggers (``gtstyle.render``, ``gtstyle.strata``, ...) propagate to
    this logger; it does not propagate further, so calling this again
    replaces the handlers rather than duplicating output.
    """
    if level is None:
        level = _get_log_level_from_env()

    logger = logging.getLogger(CONFIG['LOGGER_NAME'])
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Prevent propagation to root logger (avoids duplicate messages)
    logger.propagate = False

    return logger


def log_call_list(logger, calls):
    """
    Log the contents of a call list at DEBUG level, one line per entry.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance
    calls : gtstyle.calls.CallList
        Call list to describe
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("-" * 60)
    for name, entries in calls.items():
        logger.debug(f"  {name}: {len(entries)} call(s)")
    logger.debug("-" * 60)
