"""Middleware components for the expiry notifier service."""

from expiry_queue.middleware.process_time import ProcessTimeMiddleware
from expiry_queue.middleware.request_id import RequestIDMiddleware

__all__ = [
    "ProcessTimeMiddleware",
    "RequestIDMiddleware",
]
