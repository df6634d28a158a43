"""Request ID middleware for correlating job runs across services."""

import re
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from expiry_queue.constants import REQUEST_ID_HEADER
from expiry_queue.logging.context import clear_request_id, set_request_id

# Scheduler and gateway IDs are UUIDs or similar opaque tokens
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


class RequestIDMiddleware:
    """Middleware to handle request ID for tracing job invocations.

    An incoming X-Request-ID is reused when it looks like an opaque token;
    anything else is replaced by a fresh UUID so arbitrary header content
    never reaches the logs. The ID is stored in thread-local storage for
    the logging processors and echoed on the response.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and add request ID tracking.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response with request ID header added.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER, "")
        if not _VALID_REQUEST_ID.match(request_id):
            request_id = str(uuid.uuid4())

        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
