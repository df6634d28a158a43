"""Component tests for the queue job endpoints."""

import json
from datetime import timedelta

from django.test import override_settings
from django.utils import timezone

import responses

from expiry_queue.enums import QueueStatus
from expiry_queue.models import ExpiringItemQueueEntry

from tests.base import BaseComponentTest
from tests.factories import create_food_item, create_queue_entry, create_user

SEND_URL = "https://api.telegram.test/bot123456:test-bot-token/sendMessage"


class TestQueueEndpointAuthentication(BaseComponentTest):
    """Job endpoints require the service bearer token."""

    def test_missing_token_is_rejected(self):
        """Test 401 without an Authorization header."""
        response = self.client.post("/api/v1/expiry/queue/populate")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response["WWW-Authenticate"], "Bearer")

    def test_wrong_token_is_rejected(self):
        """Test 401 with a token that does not match."""
        response = self.client.post(
            "/api/v1/expiry/queue/process", HTTP_AUTHORIZATION="Bearer nope"
        )

        self.assertEqual(response.status_code, 401)
        self.assertFalse(ExpiringItemQueueEntry.objects.exists())

    def test_stats_requires_token(self):
        """Test that read-only stats are protected too."""
        response = self.client.get("/api/v1/expiry/queue/stats")

        self.assertEqual(response.status_code, 401)


class TestPopulateQueueEndpoint(BaseComponentTest):
    """Tests for POST /queue/populate."""

    def test_populate_stages_reminders(self):
        """Test a run with an explicit horizon."""
        user = create_user()
        create_food_item(user=user, expires_in_days=1)
        create_food_item(user=user, expires_in_days=5)

        response = self.auth_client.post(
            "/api/v1/expiry/queue/populate",
            data=json.dumps({"days_ahead": 3}),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["days_ahead"], 3)
        self.assertEqual(data["total_processed"], 1)
        self.assertEqual(len(data["results"]), 4)
        self.assertEqual(ExpiringItemQueueEntry.objects.count(), 1)

    def test_populate_without_body_uses_configured_horizon(self):
        """Test that an empty body falls back to the settings."""
        response = self.auth_client.post("/api/v1/expiry/queue/populate")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["days_ahead"], 7)

    def test_populate_rejects_negative_horizon(self):
        """Test 400 for days_ahead below zero."""
        response = self.auth_client.post(
            "/api/v1/expiry/queue/populate",
            data=json.dumps({"days_ahead": -1}),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertFalse(data["success"])
        self.assertEqual(data["error"], "bad_request")

    def test_populate_rejects_horizon_over_a_year(self):
        """Test 400 for an unreasonably large horizon."""
        response = self.auth_client.post(
            "/api/v1/expiry/queue/populate",
            data=json.dumps({"days_ahead": 400}),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 400)


class TestProcessQueueEndpoint(BaseComponentTest):
    """Tests for POST /queue/process."""

    @responses.activate
    def test_process_sends_pending_reminders(self):
        """Test that staged rows are delivered and marked sent."""
        responses.post(SEND_URL, json={"ok": True, "result": {"message_id": 7}})
        entry = create_queue_entry(days_until_expiry=0)

        response = self.auth_client.post("/api/v1/expiry/queue/process")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["total_sent"], 1)
        self.assertEqual(data["message"], "Processed 1 items: 1 sent, 0 failed")
        entry.refresh_from_db()
        self.assertEqual(entry.status, QueueStatus.SENT.value)
        body = json.loads(responses.calls[0].request.body)
        self.assertTrue(body["text"].startswith("🚨 ALERT:"))

    @responses.activate
    def test_process_reports_row_failures_with_200(self):
        """Test that a rejected message still yields a successful run."""
        responses.post(
            SEND_URL,
            status=400,
            json={"ok": False, "error_code": 400, "description": "chat not found"},
        )
        entry = create_queue_entry()

        response = self.auth_client.post("/api/v1/expiry/queue/process")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total_failed"], 1)
        entry.refresh_from_db()
        self.assertEqual(entry.status, QueueStatus.FAILED.value)
        self.assertIn("chat not found", entry.error_message)

    def test_process_with_empty_queue(self):
        """Test the no-op run."""
        response = self.auth_client.post("/api/v1/expiry/queue/process")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total_processed"], 0)

    @override_settings(TELEGRAM_BOT_TOKEN="")
    def test_process_without_bot_token_fails_the_job(self):
        """Test 500 and untouched rows when the channel is not configured."""
        entry = create_queue_entry()

        response = self.auth_client.post("/api/v1/expiry/queue/process")

        self.assertEqual(response.status_code, 500)
        self.assertFalse(response.json()["success"])
        entry.refresh_from_db()
        self.assertEqual(entry.status, QueueStatus.PENDING.value)


class TestCleanupAndStatsEndpoints(BaseComponentTest):
    """Tests for POST /queue/cleanup and GET /queue/stats."""

    def test_cleanup_removes_expired_rows(self):
        """Test both sweeps through HTTP."""
        old = create_queue_entry()
        ExpiringItemQueueEntry.objects.filter(pk=old.pk).update(
            created_at=timezone.now() - timedelta(days=31)
        )
        create_queue_entry(
            status=QueueStatus.SENT,
            processed_at=timezone.now() - timedelta(days=8),
        )
        kept = create_queue_entry()

        response = self.auth_client.post("/api/v1/expiry/queue/cleanup")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["deleted_expired"], 1)
        self.assertEqual(data["deleted_processed"], 1)
        self.assertEqual(data["total_deleted"], 2)
        self.assertEqual(
            list(ExpiringItemQueueEntry.objects.values_list("pk", flat=True)),
            [kept.pk],
        )

    def test_stats_counts_rows_by_status(self):
        """Test the status breakdown."""
        user = create_user()
        create_queue_entry(food_item=create_food_item(user=user))
        create_queue_entry(food_item=create_food_item(user=user))
        create_queue_entry(status=QueueStatus.FAILED)

        response = self.auth_client.get("/api/v1/expiry/queue/stats")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["total"], 3)
        self.assertEqual(
            data["status_breakdown"],
            {"pending": 2, "processing": 0, "sent": 0, "failed": 1},
        )
