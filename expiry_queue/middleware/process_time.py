"""Process time middleware for job duration monitoring."""

import time
from collections.abc import Callable

import structlog
from django.http import HttpRequest, HttpResponse

from expiry_queue.constants import PROCESS_TIME_HEADER, SLOW_REQUEST_THRESHOLD

logger = structlog.get_logger(__name__)


class ProcessTimeMiddleware:
    """Middleware to track request processing time.

    Adds the X-Process-Time header (seconds) to every response. Job
    triggers legitimately run for several seconds, so each one is logged
    with its duration; anything slower than SLOW_REQUEST_THRESHOLD is
    logged as a warning.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        start_time = time.perf_counter()

        response = self.get_response(request)

        duration = time.perf_counter() - start_time
        response[PROCESS_TIME_HEADER] = f"{duration:.6f}"

        if duration > SLOW_REQUEST_THRESHOLD:
            logger.warning(
                "slow_request",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_seconds=round(duration, 3),
                threshold_seconds=SLOW_REQUEST_THRESHOLD,
            )
        elif request.method == "POST":
            logger.info(
                "job_request_completed",
                path=request.path,
                status_code=response.status_code,
                duration_seconds=round(duration, 3),
            )

        return response
