"""Health check schemas."""

from expiry_queue.schemas.health.dependency_health import DependencyHealth
from expiry_queue.schemas.health.response.liveness_response import LivenessResponse
from expiry_queue.schemas.health.response.readiness_response import ReadinessResponse

__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
