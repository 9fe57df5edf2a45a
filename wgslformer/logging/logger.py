# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logging for wgslformer.

Every log line is a single JSON object with a timestamp, level, logger
name and message, plus whatever the caller passed through ``extra``:

  {"ts": "2026-...", "level": "INFO", "module": "wgslformer.model.factory",
   "msg": "model_built", "total_parameters": 123456}

How this works:
  - The standard ``logging`` module does the routing. JsonFormatter turns
    each record into one JSON line.
  - ``get_logger`` is the factory every module uses. It attaches a stdout
    handler (and optionally a file handler) exactly once per logger.
  - ``configure_logging`` applies GlobalConfig's level and log file to
    loggers that already exist and to every logger created afterwards.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from wgslformer.config.schema import GlobalConfig

_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "relativeCreated",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "pathname",
        "filename",
        "module",
        "levelno",
        "levelname",
        "processName",
        "process",
        "threadName",
        "thread",
        "message",
        "msecs",
        "taskName",
    }
)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

_PACKAGE_PREFIX = "wgslformer"

_defaults: dict[str, object] = {"level": "INFO", "log_file": None}


class JsonFormatter(logging.Formatter):
    """
    Format log records as single-line JSON objects.

    Mandatory fields are ``ts`` (ISO 8601 UTC), ``level``, ``module`` (the
    logger name) and ``msg``. Fields passed via ``extra`` are merged in,
    which is how the model reports shapes and parameter counts.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name into the matching logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. "
            f"Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def _attach_file_handler(logger: logging.Logger, log_file: Path, level: int) -> None:
    target = str(log_file.resolve())
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create (or fetch) a structured JSON logger.

    Args:
        name: Logger name, usually ``__name__`` of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL. When
            omitted, the level set by ``configure_logging`` is used.
        log_file: Optional file that receives the same JSON lines as stdout.

    Returns:
        A logging.Logger that writes JSON and does not propagate to root.

    Raises:
        ValueError: If ``log_level`` is not a known level name.
    """
    level = _resolve_log_level(log_level or str(_defaults["level"]))
    if log_file is None and _defaults["log_file"] is not None:
        log_file = Path(str(_defaults["log_file"]))

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Calling get_logger twice for one name must not stack handlers.
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        if log_file is not None:
            _attach_file_handler(logger, log_file, level)
        return logger

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(JsonFormatter())
    logger.addHandler(stdout_handler)

    if log_file is not None:
        _attach_file_handler(logger, log_file, level)

    logger.propagate = False
    return logger


def configure_logging(global_config: GlobalConfig) -> None:
    """
    Apply the global config's log level and log file package-wide.

    Loggers created before this call are re-levelled in place; loggers
    created after it pick the settings up as their defaults.
    """
    _defaults["level"] = global_config.log_level
    _defaults["log_file"] = global_config.log_file

    log_file = Path(global_config.log_file) if global_config.log_file else None
    for name, existing in list(logging.Logger.manager.loggerDict.items()):
        # Placeholders stand in for parents that were never created.
        if not isinstance(existing, logging.Logger):
            continue
        if name == _PACKAGE_PREFIX or name.startswith(_PACKAGE_PREFIX + "."):
            get_logger(name, log_level=global_config.log_level, log_file=log_file)
