"""Errors raised while talking to the outbound message channel.

The channel itself converts these into failed ``SendResult`` values, so they
only escape to the API layer when a client is used directly.
"""


class DownstreamServiceError(Exception):
    """A remote API refused or failed a request.

    Attributes:
        service_name: Label of the remote API (``"telegram"``)
        status_code: HTTP status of the failed response, when there was one
    """

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        status_code: int | None = None,
    ):
        self.service_name = service_name
        self.status_code = status_code
        super().__init__(message)


class DownstreamServiceUnavailableError(DownstreamServiceError):
    """The remote API answered with a server error (5xx)."""

    def __init__(self, service_name: str, status_code: int, message: str | None = None):
        super().__init__(
            message=message or f"{service_name} is unavailable (HTTP {status_code})",
            service_name=service_name,
            status_code=status_code,
        )


class ChannelRateLimitError(DownstreamServiceError):
    """A send was refused because a request budget is exhausted.

    Raised for Bot API flood control. ``caller`` names whose budget ran out
    and ``retry_after`` is the number of seconds to wait before sending
    again.
    """

    def __init__(self, caller: str, retry_after: int, message: str | None = None):
        self.caller = caller
        self.retry_after = retry_after
        super().__init__(
            message=message
            or f"Send budget for {caller} exhausted, retry after {retry_after}s",
            service_name="telegram",
            status_code=429,
        )
