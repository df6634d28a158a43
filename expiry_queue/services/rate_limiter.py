"""Per-caller token bucket backed by the Django cache."""

import time

import structlog
from django.core.cache import cache

from expiry_queue.constants import (
    DEFAULT_CHANNEL_RATE_LIMIT_REQUESTS,
    DEFAULT_CHANNEL_RATE_LIMIT_WINDOW,
)

logger = structlog.get_logger(__name__)


class TokenBucketRateLimiter:
    """Token bucket rate limiter shared across service instances.

    Each caller gets a bucket of ``max_requests`` tokens that refills at
    ``max_requests`` per ``window`` seconds. Bucket state lives in the
    configured cache (Redis in production), so every worker sees the same
    budget.

    ``caller_limits`` gives individual callers their own bucket size, which
    also refills over the same ``window``.

    If the cache is unavailable the limiter logs the failure and lets the
    call through (graceful degradation).
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_CHANNEL_RATE_LIMIT_REQUESTS,
        window: int = DEFAULT_CHANNEL_RATE_LIMIT_WINDOW,
        key_prefix: str = "channel_rate_limit",
        caller_limits: dict[str, int] | None = None,
    ) -> None:
        self.max_requests = max_requests
        self.window = window
        self.key_prefix = key_prefix
        self.caller_limits = dict(caller_limits or {})

    def limit_for(self, caller: str) -> int:
        return self.caller_limits.get(caller, self.max_requests)

    def _cache_key(self, caller: str) -> str:
        return f"{self.key_prefix}:{caller}"

    def check(self, caller: str) -> tuple[bool, int]:
        """Consume one token from the caller's bucket.

        Args:
            caller: Identity the budget is tracked against (client IP,
                service name, ...)

        Returns:
            Tuple of (allowed, retry_after_seconds). retry_after_seconds is 0
            when the call is allowed.
        """
        cache_key = self._cache_key(caller)
        max_requests = self.limit_for(caller)

        try:
            bucket = cache.get(cache_key)

            current_time = time.time()

            if bucket is None:
                tokens = max_requests - 1
                last_refill = current_time
            else:
                tokens, last_refill = bucket

                time_elapsed = current_time - last_refill
                tokens_to_add = (time_elapsed / self.window) * max_requests
                tokens = min(max_requests, tokens + tokens_to_add)

                if tokens < 1:
                    tokens_needed = 1 - tokens
                    retry_after = int((tokens_needed / max_requests) * self.window)
                    logger.warning(
                        "channel_rate_limit_exceeded",
                        caller=caller,
                        retry_after=max(1, retry_after),
                    )
                    return False, max(1, retry_after)

                tokens -= 1
                last_refill = current_time

            cache.set(cache_key, (tokens, last_refill), timeout=self.window * 2)

            return True, 0

        except Exception as e:
            logger.error("channel_rate_limit_check_failed", caller=caller, error=str(e))
            return True, 0

    def reset(self, caller: str) -> None:
        """Drop the caller's bucket so its next call starts full."""
        cache.delete(self._cache_key(caller))
