"""URL routing configuration for the expiry_queue application."""

from django.urls import path

from .views import (
    CleanupQueueView,
    LivenessCheckView,
    PopulateQueueView,
    ProcessQueueView,
    QueueStatsView,
    ReadinessCheckView,
    TelegramSendView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Queue job triggers
    path("queue/populate", PopulateQueueView.as_view(), name="queue-populate"),
    path("queue/process", ProcessQueueView.as_view(), name="queue-process"),
    path("queue/cleanup", CleanupQueueView.as_view(), name="queue-cleanup"),
    # Admin endpoints
    path("queue/stats", QueueStatsView.as_view(), name="queue-stats"),
    # Outbound channel relay
    path("telegram/send", TelegramSendView.as_view(), name="telegram-send"),
]
