"""Thread-local context for correlating log events.

Two identifiers are tracked: the HTTP request id (set by RequestIDMiddleware)
and the job run id (set by the queue services for the duration of a run).
"""

import threading

_context = threading.local()


def set_request_id(request_id: str) -> None:
    """Store the request ID in thread-local storage.

    Args:
        request_id: The unique request identifier to store.
    """
    _context.request_id = request_id


def get_request_id() -> str | None:
    """Return the current request ID, or None if not set."""
    return getattr(_context, "request_id", None)


def clear_request_id() -> None:
    """Clear the request ID after the request completes."""
    if hasattr(_context, "request_id"):
        delattr(_context, "request_id")


def set_job_context(job_name: str, run_id: str) -> None:
    """Mark the current thread as executing a queue job run.

    Args:
        job_name: Name of the job (e.g. "populate_queue").
        run_id: Unique identifier of this invocation.
    """
    _context.job = (job_name, run_id)


def get_job_context() -> tuple[str, str] | None:
    """Return (job_name, run_id) for the running job, if any."""
    return getattr(_context, "job", None)


def clear_job_context() -> None:
    """Clear the job context once the run has finished."""
    if hasattr(_context, "job"):
        delattr(_context, "job")
