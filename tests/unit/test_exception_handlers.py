"""Unit tests for exception handlers."""

import unittest
import uuid
from unittest.mock import Mock, patch

from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.views import APIView

from expiry_queue.exceptions import (
    ChannelRateLimitError,
    DownstreamServiceUnavailableError,
    InvalidStatusTransition,
)
from expiry_queue.exceptions.handlers import custom_exception_handler


class TestCustomExceptionHandler(unittest.TestCase):
    """Test cases for custom exception handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_request = Mock()
        self.mock_request.path = "/api/v1/expiry/queue/process"
        self.mock_request.method = "POST"
        self.mock_request.META = {"REMOTE_ADDR": "127.0.0.1"}

        self.mock_view = Mock(spec=APIView)
        self.mock_view.request = self.mock_request

        self.context = {"view": self.mock_view, "request": self.mock_request}

    @patch("expiry_queue.exceptions.handlers.get_request_id")
    def test_improperly_configured_is_500_with_success_false(
        self, mock_get_request_id
    ):
        """Test that a job refusing to run reports success=false."""
        mock_get_request_id.return_value = "req-1"

        response = custom_exception_handler(
            ImproperlyConfigured("TELEGRAM_BOT_TOKEN is required"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(response.data["success"])
        self.assertIn("TELEGRAM_BOT_TOKEN", response.data["error"])
        self.assertEqual(response.data["request_id"], "req-1")
        self.assertEqual(response["X-Request-ID"], "req-1")

    @patch("expiry_queue.exceptions.handlers.get_request_id")
    def test_database_error_hides_details(self, mock_get_request_id):
        """Test that database errors do not leak driver messages."""
        mock_get_request_id.return_value = None

        response = custom_exception_handler(
            DatabaseError("password authentication failed"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertNotIn("password", response.data["message"])

    @patch("expiry_queue.exceptions.handlers.get_request_id")
    def test_rate_limit_sets_retry_after(self, mock_get_request_id):
        """Test 429 mapping with the Retry-After header."""
        mock_get_request_id.return_value = "req-2"

        response = custom_exception_handler(
            ChannelRateLimitError(caller="ip:10.0.0.1", retry_after=12), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_429_TOO_MANY_REQUESTS)
        self.assertEqual(response["Retry-After"], "12")

    @patch("expiry_queue.exceptions.handlers.get_request_id")
    def test_downstream_error_is_bad_gateway(self, mock_get_request_id):
        """Test 502 mapping for Telegram failures."""
        mock_get_request_id.return_value = "req-3"

        response = custom_exception_handler(
            DownstreamServiceUnavailableError("telegram", 503), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertIn("telegram", response.data["message"])

    @patch("expiry_queue.exceptions.handlers.get_request_id")
    def test_invalid_transition_is_conflict(self, mock_get_request_id):
        """Test 409 mapping for forbidden status changes."""
        mock_get_request_id.return_value = "req-4"
        exc = InvalidStatusTransition(uuid.uuid4(), "sent", "processing")

        response = custom_exception_handler(exc, self.context)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    @patch("expiry_queue.exceptions.handlers.get_request_id")
    def test_drf_exceptions_keep_their_status(self, mock_get_request_id):
        """Test that DRF's own handler still answers authentication errors."""
        mock_get_request_id.return_value = "req-5"

        response = custom_exception_handler(NotAuthenticated(), self.context)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response["X-Request-ID"], "req-5")

    @patch("expiry_queue.exceptions.handlers.get_request_id")
    def test_django_http404(self, mock_get_request_id):
        """Test that Django Http404 exception is handled correctly."""
        mock_get_request_id.return_value = None

        response = custom_exception_handler(Http404("missing"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    @patch("expiry_queue.exceptions.handlers.get_request_id")
    def test_unexpected_exception_is_generic_500(self, mock_get_request_id):
        """Test the catch-all branch."""
        mock_get_request_id.return_value = None

        response = custom_exception_handler(RuntimeError("secret"), self.context)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["message"], "An internal server error occurred.")


if __name__ == "__main__":
    unittest.main()
