"""Base client for downstream HTTP services."""

from typing import Any

import requests
import structlog

from expiry_queue.constants import DEFAULT_DOWNSTREAM_TIMEOUT_SECONDS
from expiry_queue.exceptions import (
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
)

logger = structlog.get_logger(__name__)


class BaseDownstreamClient:
    """Base class for downstream service HTTP clients.

    Every request carries a timeout so a stuck downstream cannot stall a
    queue run. Error responses are converted to DownstreamServiceError
    subclasses; transport failures propagate as requests exceptions.
    """

    def __init__(
        self,
        service_name: str,
        base_url: str,
        timeout: int = DEFAULT_DOWNSTREAM_TIMEOUT_SECONDS,
    ):
        """Initialize base downstream client.

        Args:
            service_name: Name of the downstream service (for logging/errors)
            base_url: Base URL for the service
            timeout: Timeout in seconds applied to every request
        """
        self.service_name = service_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        """Get common HTTP headers for requests."""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _extract_error_message(self, response: requests.Response) -> str:
        """Return the error detail carried by an error response.

        Subclasses override this to understand their service's error body.
        """
        return response.text

    def _client_error(
        self, response: requests.Response, error_detail: str
    ) -> DownstreamServiceError:
        """Build the exception raised for a 4xx response."""
        return DownstreamServiceError(
            message=(
                f"{self.service_name} returned "
                f"{response.status_code}: {error_detail}"
            ),
            service_name=self.service_name,
            status_code=response.status_code,
        )

    def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        **kwargs,
    ) -> requests.Response:
        """Make HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Full URL for the request
            params: Query parameters
            json_data: JSON body data
            **kwargs: Additional arguments to pass to requests

        Returns:
            Response object for any 2xx/3xx status

        Raises:
            DownstreamServiceError: For client errors (4xx)
            DownstreamServiceUnavailableError: For server errors (5xx)
            requests.Timeout: For timeout errors
            requests.ConnectionError: For connection errors
        """
        headers = self._get_headers()
        if "headers" in kwargs:
            headers.update(kwargs.pop("headers"))

        kwargs.setdefault("timeout", self.timeout)

        log_url = kwargs.pop("log_url", url)

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                **kwargs,
            )
        except requests.Timeout:
            logger.error(
                "downstream_request_timed_out",
                service=self.service_name,
                method=method,
                url=log_url,
                timeout=kwargs["timeout"],
            )
            raise
        except requests.ConnectionError as e:
            logger.error(
                "downstream_connection_failed",
                service=self.service_name,
                method=method,
                url=log_url,
                error=str(e),
            )
            raise

        logger.debug(
            "downstream_response_received",
            service=self.service_name,
            method=method,
            url=log_url,
            status_code=response.status_code,
        )

        if response.status_code >= 500:
            logger.error(
                "downstream_server_error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise DownstreamServiceUnavailableError(
                service_name=self.service_name,
                status_code=response.status_code,
            )

        if response.status_code >= 400:
            error_detail = self._extract_error_message(response)
            logger.warning(
                "downstream_client_error",
                service=self.service_name,
                status_code=response.status_code,
                error=error_detail,
            )
            raise self._client_error(response, error_detail)

        return response
