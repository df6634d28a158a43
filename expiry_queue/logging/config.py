"""Structlog configuration: JSON file logs plus a colored console stream."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from expiry_queue.logging.processors import (
    add_job_context,
    add_request_context,
    add_runtime_metadata,
    console_renderer,
)

DEFAULT_LOG_FILE_PATH = "./logs/expiry-notifier.log"


def _shared_processors() -> list:
    """Processors applied to both structlog and foreign (stdlib) records."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
        add_job_context,
    ]


def setup_logging() -> None:
    """Configure structlog for the service entry points.

    File output is JSON with full metadata, rotated at 50MB and kept for
    roughly a week of job runs. Console output is colored and always enabled
    so container log collectors see every queue event.

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/expiry-notifier.log)
    - LOG_LEVEL: Logging level (default: INFO)
    - LOG_TO_FILE: Set to "false" to disable the JSON file handler
    - SERVICE_NAME: Service name for metadata (default: expiry-notifier)
    - ENVIRONMENT: Deployment environment (default: development)
    """
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE_PATH)
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    log_to_file = os.getenv("LOG_TO_FILE", "true").lower() != "false"

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_runtime_metadata,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=_shared_processors(),
        )
    )
    handlers.append(console_handler)

    if log_to_file:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file_path,
            maxBytes=50 * 1024 * 1024,
            backupCount=14,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=[
                    *_shared_processors(),
                    add_runtime_metadata,
                ],
            )
        )
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)
    for handler in handlers:
        root_logger.addHandler(handler)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_file=log_file_path if log_to_file else None,
        log_level=log_level_name,
    )
