"""Exception types for the expiry notifier service.

The DRF exception handler lives in ``expiry_queue.exceptions.handlers`` and
is not re-exported here so that models can import these types while the app
registry is still loading.
"""

from expiry_queue.exceptions.downstream_exceptions import (
    ChannelRateLimitError,
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
)
from expiry_queue.exceptions.queue_exceptions import InvalidStatusTransition

__all__ = [
    "ChannelRateLimitError",
    "DownstreamServiceError",
    "DownstreamServiceUnavailableError",
    "InvalidStatusTransition",
]
