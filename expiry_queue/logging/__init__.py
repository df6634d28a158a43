"""Logging utilities for the expiry notifier service."""

from expiry_queue.logging.config import setup_logging
from expiry_queue.logging.context import (
    clear_job_context,
    clear_request_id,
    get_job_context,
    get_request_id,
    set_job_context,
    set_request_id,
)

__all__ = [
    "clear_job_context",
    "clear_request_id",
    "get_job_context",
    "get_request_id",
    "set_job_context",
    "set_request_id",
    "setup_logging",
]
