"""Custom structlog processors for request/job context and service metadata."""

import os
import threading

from colorama import Fore, Style, init
from structlog.typing import EventDict, WrappedLogger

from expiry_queue.logging.context import get_job_context, get_request_id

# Fields already shown in the console prefix or too noisy for a terminal
_CONSOLE_EXCLUDED_FIELDS = frozenset(
    {
        "level",
        "timestamp",
        "request_id",
        "job",
        "run_id",
        "logger",
        "event",
        "process_id",
        "thread_id",
        "service_name",
        "environment",
    }
)

_LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the request ID from thread-local context, when one is set."""
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_job_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the queue job name and run ID while a job is executing.

    Lets every event emitted during one populate/process invocation be
    grouped together, including events from repositories and clients.
    """
    job_context = get_job_context()
    if job_context:
        event_dict.setdefault("job", job_context[0])
        event_dict.setdefault("run_id", job_context[1])
    return event_dict


def add_runtime_metadata(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp file records with the deployment and the worker that wrote them.

    Gunicorn runs several workers with threads, so process and thread IDs
    tell apart concurrent job runs in the JSON log.
    """
    event_dict.update(
        service_name=os.getenv("SERVICE_NAME", "expiry-notifier"),
        environment=os.getenv("ENVIRONMENT", "development"),
        process_id=os.getpid(),
        thread_id=threading.get_ident(),
    )
    return event_dict


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render log events as colored single lines for console output.

    Format: [LEVEL] timestamp | trace | logger_name | message key=value...

    The trace column is ``job:run`` (short run ID) while a queue job is
    running, otherwise the HTTP request ID.
    """
    init(autoreset=True)

    level = str(event_dict.get("level", "INFO")).upper()
    timestamp = event_dict.get("timestamp", "")
    if "run_id" in event_dict:
        trace = f"{event_dict.get('job', 'job')}:{str(event_dict['run_id'])[:8]}"
    else:
        trace = event_dict.get("request_id", "-")
    logger_name = event_dict.get("logger", "root")
    message = event_dict.get("event", "")

    level_color = _LEVEL_COLORS.get(level, Fore.WHITE)

    formatted = (
        f"{level_color}[{level:<8}]{Style.RESET_ALL} "
        f"{Fore.WHITE}{timestamp}{Style.RESET_ALL} | "
        f"{Fore.MAGENTA}{trace}{Style.RESET_ALL} | "
        f"{Fore.BLUE}{logger_name}{Style.RESET_ALL} | "
        f"{message}"
    )

    extra_fields = {
        k: v for k, v in event_dict.items() if k not in _CONSOLE_EXCLUDED_FIELDS
    }
    if extra_fields:
        extra_str = " ".join(f"{k}={v}" for k, v in extra_fields.items())
        formatted += f" {Fore.YELLOW}{extra_str}{Style.RESET_ALL}"

    return formatted
