"""Logging helpers for studydeck."""

import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Optional

# Correlates every record emitted while one extraction request is running
request_id_var: ContextVar[Optional[str]] = ContextVar("studydeck_request_id", default=None)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ContextLogger:
    """Logger wrapper that appends ``extra_data`` and the request id to messages."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    @staticmethod
    def _format_extra_data(extra_data: Optional[dict[str, Any]]) -> str:
        if not extra_data:
            return ""
        return " [" + ", ".join(f"{k}={v}" for k, v in extra_data.items()) + "]"

    def _log(self, level: int, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        request_id = request_id_var.get()
        if request_id:
            extra_data = {**(extra_data or {}), "request_id": request_id}
        self.logger.log(level, msg + self._format_extra_data(extra_data), **kwargs)

    def debug(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.DEBUG, msg, extra_data, **kwargs)

    def info(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.INFO, msg, extra_data, **kwargs)

    def warning(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.WARNING, msg, extra_data, **kwargs)

    def error(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.ERROR, msg, extra_data, **kwargs)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure plain-text logging to stdout.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger (typically for ``__name__``)."""
    return ContextLogger(logging.getLogger(name))


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set the request id for the current context, generating one if omitted."""
    if request_id is None:
        request_id = uuid.uuid4().hex[:12]
    request_id_var.set(request_id)
    return request_id


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self, name: str):
        self.name = name
        self.start_time: Optional[float] = None
        self.elapsed_ms: Optional[int] = None

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        if self.start_time is not None:
            self.elapsed_ms = int((time.perf_counter() - self.start_time) * 1000)

    def get_elapsed_ms(self) -> int:
        if self.elapsed_ms is not None:
            return self.elapsed_ms
        if self.start_time is not None:
            return int((time.perf_counter() - self.start_time) * 1000)
        return 0
