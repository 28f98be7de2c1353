"""Core services and utilities for appdoc."""

from .logging import (
    LogContext,
    bind_contextvars,
    get_logger,
    log_collaborator_call,
    log_exception,
    setup_logging,
    unbind_contextvars,
)

__all__ = [
    "LogContext",
    "bind_contextvars",
    "get_logger",
    "log_collaborator_call",
    "log_exception",
    "setup_logging",
    "unbind_contextvars",
]
