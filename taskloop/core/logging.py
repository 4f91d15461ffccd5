"""
Structured JSON Logging Module.

Outputs one JSON object per record with timestamps, log levels and the
worker/iteration context of the loop that emitted it.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from contextvars import ContextVar

from opentelemetry import trace

from taskloop.core.config import get_settings

# Context vars set by the worker loop while it runs
worker_name_ctx: ContextVar[Optional[str]] = ContextVar("worker_name", default=None)
iteration_ctx: ContextVar[Optional[int]] = ContextVar("iteration", default=None)


class JSONFormatter(logging.Formatter):
    """
    Formatter that dumps records as JSON.
    """

    def __init__(self, service: Optional[str] = None):
        super().__init__()
        self.service = service or get_settings().app_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
            "service": self.service,
        }

        worker = worker_name_ctx.get()
        if worker:
            log_data["worker"] = worker

        iteration = iteration_ctx.get()
        if iteration is not None:
            log_data["iteration"] = iteration

        # Trace ID from OpenTelemetry when a span is active
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_data["trace_id"] = format(span_context.trace_id, "032x")
            log_data["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(level: Optional[str] = None, service: Optional[str] = None) -> None:
    """
    Configures the root logger to write JSON lines to stdout.

    Args:
        level: Log level name. Defaults to LOG_LEVEL from the settings.
        service: Service name stamped on each line. Defaults to APP_NAME.
    """
    settings = get_settings()
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())

    # Replace whatever handlers were installed before
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service=service or settings.app_name))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
