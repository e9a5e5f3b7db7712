"""
Diagnostic logging for the ghbuild CLI.

User-facing progress goes through :mod:`ghbuild.lib.output`; this logger
carries the detail behind it (commands run, paths resolved, config sources).
It is quiet by default and becomes chatty with ``--verbose`` or ``LOG_LEVEL``.
"""

import logging
import os
import sys

LOGGER_NAME = "ghbuild"


def setup_logger(verbose: bool = False) -> logging.Logger:
    """
    Configure the ``ghbuild`` package logger.

    Format is determined by the LOG_FORMAT environment variable:
    - text: Human-readable lines with timestamps (default)
    - json: JSON structured lines, one object per record

    Parameters
    ----------
    verbose : bool, optional
        Force DEBUG level regardless of LOG_LEVEL, by default False.

    Returns
    -------
    logging.Logger
        Configured logger instance. Child loggers created with
        ``logging.getLogger(__name__)`` inside the package inherit it.

    Environment Variables
    ---------------------
    LOG_FORMAT : str
        "text" or "json" (default: text)
    LOG_LEVEL : str
        Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: WARNING)
    """
    logger = logging.getLogger(LOGGER_NAME)

    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        log_level = os.getenv("LOG_LEVEL", "WARNING").upper()
        logger.setLevel(getattr(logging, log_level, logging.WARNING))

    # Remove existing handlers to avoid duplicates if called multiple times
    logger.handlers.clear()

    # stderr keeps diagnostics out of piped command output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)

    log_format = os.getenv("LOG_FORMAT", "text").lower()
    if log_format == "json":
        formatter = _create_json_formatter()
    else:
        formatter = _create_text_formatter()

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def _create_json_formatter() -> logging.Formatter:
    """
    Create JSON formatter using python-json-logger.

    Each record becomes one JSON object with ``severity``, ``logger``
    and ``message`` keys plus any ``extra`` fields.
    """
    from pythonjsonlogger import jsonlogger

    class JsonFormatter(jsonlogger.JsonFormatter):
        def add_fields(self, log_record, record, message_dict):
            super().add_fields(log_record, record, message_dict)
            log_record["severity"] = record.levelname
            log_record["logger"] = record.name

    return JsonFormatter("%(message)s")


def _create_text_formatter() -> logging.Formatter:
    """
    Create human-readable formatter.

    Format: ``2025-11-03 14:30:52 DEBUG [ghbuild.lib.git] message``
    """
    return logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
