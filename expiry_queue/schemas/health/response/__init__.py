"""Health response schemas."""

from expiry_queue.schemas.health.response.liveness_response import LivenessResponse
from expiry_queue.schemas.health.response.readiness_response import ReadinessResponse

__all__ = ["LivenessResponse", "ReadinessResponse"]
