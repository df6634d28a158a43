"""Global exception handler for the expiry notifier API."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from expiry_queue.exceptions.downstream_exceptions import (
    ChannelRateLimitError,
    DownstreamServiceError,
)
from expiry_queue.exceptions.queue_exceptions import InvalidStatusTransition
from expiry_queue.logging.context import get_request_id

logger = logging.getLogger(__name__)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Job endpoints answer with ``{success: false, error, ...}`` so the
    scheduler sees a uniform body whether the job ran or refused to run.
    Every error body also carries ``status``, ``message``, ``request_id`` and
    ``timestamp``.

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, ImproperlyConfigured):
            response = _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                f"Service is not configured: {exc}",
                request_id,
            )
        elif isinstance(exc, DatabaseError):
            response = _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "A database error occurred.",
                request_id,
            )
        elif isinstance(exc, ChannelRateLimitError):
            response = _error_response(
                status.HTTP_429_TOO_MANY_REQUESTS, str(exc), request_id
            )
            response["Retry-After"] = str(exc.retry_after)
        elif isinstance(exc, DownstreamServiceError):
            response = _error_response(
                status.HTTP_502_BAD_GATEWAY, str(exc), request_id
            )
        elif isinstance(exc, InvalidStatusTransition):
            response = _error_response(status.HTTP_409_CONFLICT, str(exc), request_id)
        elif isinstance(exc, Http404):
            response = _error_response(
                status.HTTP_404_NOT_FOUND,
                "The requested resource was not found.",
                request_id,
            )
        else:
            response = _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An internal server error occurred.",
                request_id,
            )

    if request_id and response is not None:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)

    return response


def _error_response(
    status_code: int, message: str, request_id: str | None
) -> Response:
    """Create a standardized error response.

    Args:
        status_code: The HTTP status code.
        message: The error message to return to the client.
        request_id: The request ID for tracing.

    Returns:
        Response with the standard error body.
    """
    return Response(
        {
            "success": False,
            "error": message,
            "status": status_code,
            "message": message,
            "request_id": request_id,
            "timestamp": datetime.now(UTC).isoformat(),
        },
        status=status_code,
    )


def _log_exception(
    exc: Exception,
    request: Any,
    response: Response | None,
) -> None:
    """Log exception details, with a stack trace in DEBUG mode.

    Args:
        exc: The exception that was raised.
        request: The HTTP request object.
        response: The response object (if available).
    """
    status_code = response.status_code if response is not None else 500
    if isinstance(exc, (Http404, APIException)) and 400 <= status_code < 500:
        log_level = logging.WARNING
    else:
        log_level = logging.ERROR

    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {type(exc).__name__}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"

    logger.log(log_level, log_message)
