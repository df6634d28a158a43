"""Liveness and readiness checks for the queue service."""

import time
from collections.abc import Callable

import structlog
from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

from expiry_queue.enums import HealthStatus
from expiry_queue.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = structlog.get_logger(__name__)

CACHE_CHECK_KEY = "expiry_queue:health_check"


class HealthService:
    """Runs dependency checks and remembers each result for a short TTL.

    Orchestrators poll readiness every few seconds; the TTL keeps those polls
    from opening a database connection each time.
    """

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        self.cache_ttl_seconds = cache_ttl_seconds
        self._results: dict[str, tuple[float, DependencyHealth]] = {}

    def reset(self) -> None:
        """Forget remembered check results."""
        self._results.clear()

    def get_liveness_status(self) -> LivenessResponse:
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Combine the database and cache checks.

        The jobs cannot run without the database, so a failed database check
        makes the service not ready. A failed cache check only degrades it
        because the channel rate limiter lets sends through when the cache is
        unreachable.
        """
        dependencies = {
            "database": self.check_database_health(),
            "cache": self.check_cache_health(),
        }

        if not dependencies["database"].healthy:
            ready, degraded, status = False, True, "not_ready"
        elif not dependencies["cache"].healthy:
            ready, degraded, status = True, True, "degraded"
        else:
            ready, degraded, status = True, False, "ready"

        return ReadinessResponse(
            ready=ready,
            status=status,
            degraded=degraded,
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        """Open (or validate) the default connection without running a query."""
        return self._cached("database", self._check_database)

    def check_cache_health(self) -> DependencyHealth:
        """Write and read back a marker key in the default cache."""
        return self._cached("cache", self._check_cache)

    def _cached(
        self, name: str, check: Callable[[], DependencyHealth]
    ) -> DependencyHealth:
        now = time.time()
        remembered = self._results.get(name)
        if remembered is not None and now - remembered[0] < self.cache_ttl_seconds:
            return remembered[1]

        health = check()
        if remembered is not None and health.healthy != remembered[1].healthy:
            logger.info(
                "dependency_health_changed",
                dependency=name,
                healthy=health.healthy,
                message=health.message,
            )
        self._results[name] = (now, health)
        return health

    def _check_database(self) -> DependencyHealth:
        start = time.perf_counter()
        try:
            connection.ensure_connection()
        except OperationalError as e:
            logger.warning("database_check_failed", error=str(e))
            return _result(
                False, HealthStatus.UNHEALTHY, f"Database connection failed: {e}", start
            )
        except Exception as e:
            logger.exception("database_check_error")
            return _result(
                False,
                HealthStatus.ERROR,
                f"Unexpected error checking database: {e}",
                start,
            )
        return _result(
            True, HealthStatus.HEALTHY, "Database connection successful", start
        )

    def _check_cache(self) -> DependencyHealth:
        start = time.perf_counter()
        try:
            cache.set(CACHE_CHECK_KEY, "ok", timeout=1)
            value = cache.get(CACHE_CHECK_KEY)
        except Exception as e:
            logger.warning("cache_check_failed", error=str(e))
            return _result(
                False, HealthStatus.ERROR, f"Cache connection failed: {e}", start
            )

        if value != "ok":
            return _result(
                False,
                HealthStatus.UNHEALTHY,
                "Cache check read back an unexpected value",
                start,
            )
        return _result(
            True, HealthStatus.HEALTHY, "Cache connection successful", start
        )


def _result(
    healthy: bool, status: HealthStatus, message: str, started_at: float
) -> DependencyHealth:
    return DependencyHealth(
        healthy=healthy,
        status=status,
        message=message,
        response_time_ms=(time.perf_counter() - started_at) * 1000,
    )


# Global health service instance
health_service = HealthService()
