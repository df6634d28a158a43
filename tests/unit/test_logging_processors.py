"""Unit tests for the structlog processors."""

from expiry_queue.logging import (
    clear_job_context,
    clear_request_id,
    set_job_context,
    set_request_id,
)
from expiry_queue.logging.processors import (
    add_job_context,
    add_request_context,
    add_runtime_metadata,
    console_renderer,
)

from tests.base import BaseUnitTest


class TestContextProcessors(BaseUnitTest):
    """Tests for the processors that read thread-local context."""

    def tearDown(self):
        clear_request_id()
        clear_job_context()

    def test_request_id_is_added_when_set(self):
        set_request_id("req-1")

        event = add_request_context(None, "info", {"event": "x"})

        self.assertEqual(event["request_id"], "req-1")

    def test_no_request_id_outside_a_request(self):
        event = add_request_context(None, "info", {"event": "x"})

        self.assertNotIn("request_id", event)

    def test_job_context_is_added_during_a_run(self):
        set_job_context("process_queue", "run-123")

        event = add_job_context(None, "info", {"event": "x"})

        self.assertEqual(event["job"], "process_queue")
        self.assertEqual(event["run_id"], "run-123")

    def test_runtime_metadata(self):
        event = add_runtime_metadata(None, "info", {"event": "x"})

        self.assertEqual(event["service_name"], "expiry-notifier")
        self.assertIn("process_id", event)
        self.assertIn("thread_id", event)


class TestConsoleRenderer(BaseUnitTest):
    """Tests for the colored console line."""

    def test_job_run_is_shown_as_trace(self):
        """Test that a job event shows job:short-run-id."""
        line = console_renderer(
            None,
            "info",
            {
                "level": "info",
                "event": "queue_entry_sent",
                "job": "process_queue",
                "run_id": "0123456789abcdef",
                "entry_id": 5,
            },
        )

        self.assertIn("process_queue:01234567", line)
        self.assertIn("queue_entry_sent", line)
        self.assertIn("entry_id=5", line)
        self.assertNotIn("run_id=", line)

    def test_request_id_is_shown_outside_jobs(self):
        line = console_renderer(
            None, "info", {"level": "warning", "event": "slow", "request_id": "r-9"}
        )

        self.assertIn("r-9", line)
        self.assertIn("WARNING", line)
