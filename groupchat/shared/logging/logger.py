# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""loguru setup shared by the app, the CLI entry point and the tests."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<lvl>{message}</lvl>"
)
_DEFAULT_LOG_FILE = Path(__file__).resolve().parents[2] / "instance" / "app.log"
_QUIET_LOGGERS = {"werkzeug": logging.INFO, "sqlalchemy.engine": logging.WARNING}

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="-")

_logger.configure(extra={"correlation_id": "-"})


class ContextualLogger:
    """loguru proxy that binds the current request's correlation id."""

    def __getattr__(self, name):
        return getattr(_logger.bind(correlation_id=_correlation_id.get()), name)


class _StdlibBridge(logging.Handler):
    """Route stdlib ``logging`` records (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.opt(depth=6, exception=record.exc_info).bind(
            correlation_id=_correlation_id.get()
        ).log(level, record.getMessage())


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def clear_correlation_id() -> None:
    _correlation_id.set("-")


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = Path(os.getenv("LOG_FILE") or _DEFAULT_LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    common = {"level": level, "format": _FORMAT, "filter": sanitize_record, "diagnose": False}
    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **common)
    _logger.add(log_file, colorize=False, enqueue=True, encoding="utf-8", **common)

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, stdlib_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(stdlib_level)


logger = ContextualLogger()

__all__ = ["clear_correlation_id", "logger", "set_correlation_id", "setup_logging"]
