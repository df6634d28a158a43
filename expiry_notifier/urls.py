"""Root URL configuration for the expiry notifier service."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/expiry/", include("expiry_queue.urls")),
]
