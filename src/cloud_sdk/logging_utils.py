"""Logging setup for the SDK's own ``cloud_sdk`` logger.

Library modules log through ``logging.getLogger(__name__)`` and stay silent
until an application configures logging. ``configure_logging`` is for
applications that want the SDK's diagnostics without setting up logging
themselves; it only touches the ``cloud_sdk`` logger, never the root logger.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

from cloud_sdk.config import load_settings

SDK_LOGGER_NAME = "cloud_sdk"

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
# Marks handlers installed here so a later call can replace exactly those.
_HANDLER_MARKER = "_cloud_sdk_handler"

_logging_configured = False
_logging_lock = threading.Lock()

_logger = logging.getLogger(__name__)


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(log_file: str | None) -> list[logging.Handler]:
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file))
        except OSError as exc:
            _logger.warning("Failed to open log file %s: %s", log_file, exc)
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)
    return handlers


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach stderr (and optional file) handlers to the ``cloud_sdk`` logger.

    ``level`` overrides ``LOG_LEVEL``. Calling again replaces the handlers
    installed by the previous call and leaves any others in place.
    """
    global _logging_configured

    settings = load_settings().logging
    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)

    for handler in list(sdk_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            sdk_logger.removeHandler(handler)
            handler.close()

    for handler in _build_handlers(settings.file):
        sdk_logger.addHandler(handler)
    sdk_logger.setLevel(_resolve_level(level or settings.level))

    _logging_configured = True
    return sdk_logger


def get_logger(name: str) -> logging.Logger:
    if not _logging_configured:
        with _logging_lock:
            if not _logging_configured:
                configure_logging()
    return logging.getLogger(name)
