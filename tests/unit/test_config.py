"""Unit tests for typed settings access."""

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from expiry_queue.config import get_channel_settings, get_queue_settings


class TestGetQueueSettings(SimpleTestCase):
    """Tests for get_queue_settings."""

    @override_settings(EXPIRY_QUEUE={})
    def test_defaults_apply_when_nothing_is_overridden(self):
        """Test the built-in defaults."""
        config = get_queue_settings()

        self.assertEqual(config.days_ahead, 7)
        self.assertEqual(config.populate_batch_size, 100)
        self.assertEqual(config.process_batch_size, 50)
        self.assertEqual(config.max_items_per_run, 1000)
        self.assertEqual(config.send_delay_ms, 100)
        self.assertEqual(config.retention_days, 30)
        self.assertEqual(config.processed_retention_days, 7)

    @override_settings(EXPIRY_QUEUE={"DAYS_AHEAD": 3, "PROCESS_BATCH_SIZE": 10})
    def test_overrides_are_merged_over_defaults(self):
        """Test that partial overrides keep the remaining defaults."""
        config = get_queue_settings()

        self.assertEqual(config.days_ahead, 3)
        self.assertEqual(config.process_batch_size, 10)
        self.assertEqual(config.populate_batch_size, 100)

    @override_settings(EXPIRY_QUEUE={"PROCESS_BATCH_SIZE": 0})
    def test_invalid_value_raises_improperly_configured(self):
        """Test that out-of-range values are rejected."""
        with self.assertRaises(ImproperlyConfigured):
            get_queue_settings()


class TestGetChannelSettings(SimpleTestCase):
    """Tests for get_channel_settings."""

    def test_reads_test_settings(self):
        """Test that the configured bot token and API URL are returned."""
        config = get_channel_settings()

        self.assertEqual(config.bot_token, "123456:test-bot-token")
        self.assertEqual(config.api_base_url, "https://api.telegram.test")
        self.assertIsNone(config.parse_mode)
        self.assertEqual(config.timeout_seconds, 10)
        self.assertEqual(config.rate_limit_requests, 30)
        self.assertEqual(config.rate_limit_window, 60)
        self.assertEqual(config.processor_rate_limit_requests, 600)

    @override_settings(TELEGRAM_BOT_TOKEN="")
    def test_missing_bot_token_raises_improperly_configured(self):
        """Test that a missing bot token is a configuration error."""
        with self.assertRaises(ImproperlyConfigured) as ctx:
            get_channel_settings()

        self.assertIn("TELEGRAM_BOT_TOKEN", str(ctx.exception))
