"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "expiry_notifier.settings_test")
django.setup()

SERVICE_TOKEN = "test-service-token"


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture
def authenticated_client():
    """Provide a client that presents the service bearer token."""
    return Client(HTTP_AUTHORIZATION=f"Bearer {SERVICE_TOKEN}")
