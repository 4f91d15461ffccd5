"""Configuration and logging shared by the worker loop."""

from taskloop.core.config import Settings, get_settings
from taskloop.core.logging import (
    JSONFormatter,
    get_logger,
    iteration_ctx,
    setup_logging,
    worker_name_ctx,
)

__all__ = [
    "Settings",
    "get_settings",
    "JSONFormatter",
    "get_logger",
    "setup_logging",
    "worker_name_ctx",
    "iteration_ctx",
]
