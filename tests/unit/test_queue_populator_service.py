"""Unit tests for the populate job."""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError
from django.test import override_settings
from django.utils import timezone

from expiry_queue.enums import NotificationPriority, QueueStatus
from expiry_queue.logging import get_job_context
from expiry_queue.models import ExpiringItemQueueEntry
from expiry_queue.repositories import InventoryRepository, QueueRepository
from expiry_queue.services.queue_populator_service import QueuePopulatorService

from tests.base import BaseUnitTest
from tests.factories import create_food_item, create_queue_entry, create_user


class TestQueuePopulatorService(BaseUnitTest):
    """Tests for QueuePopulatorService.populate_queue."""

    def setUp(self):
        """Set up test fixtures."""
        super().setUp()
        self.service = QueuePopulatorService()

    def test_stages_snapshot_for_milk_expiring_tomorrow(self):
        """Test one high-priority pending row with the item snapshot."""
        user = create_user(chat_id=111)
        milk = create_food_item(
            user=user,
            expires_in_days=1,
            name="Milk",
            quantity=Decimal("1"),
            unit="liter",
            category="dairy",
        )

        result = self.service.populate_queue(days_ahead=7)

        self.assertTrue(result.success)
        self.assertEqual(result.total_processed, 1)
        self.assertEqual(len(result.results), 8)
        entry = ExpiringItemQueueEntry.objects.get()
        self.assertEqual(entry.food_item_id, milk.id)
        self.assertEqual(entry.chat_id, 111)
        self.assertEqual(entry.user_id, user.id)
        self.assertEqual(entry.item_name, "Milk")
        self.assertEqual(entry.unit, "liter")
        self.assertEqual(entry.category, "dairy")
        self.assertEqual(entry.expiration_date, milk.expiration_date)
        self.assertEqual(entry.days_until_expiry, 1)
        self.assertEqual(entry.notification_priority, NotificationPriority.HIGH.value)
        self.assertEqual(entry.status, QueueStatus.PENDING.value)
        self.assertIsNone(entry.processed_at)

    def test_priority_follows_offset(self):
        """Test that each offset gets the priority of its days-until-expiry."""
        user = create_user()
        for days in (0, 3, 7):
            create_food_item(user=user, expires_in_days=days)

        self.service.populate_queue(days_ahead=7)

        priorities = dict(
            ExpiringItemQueueEntry.objects.values_list(
                "days_until_expiry", "notification_priority"
            )
        )
        self.assertEqual(priorities, {0: "urgent", 3: "medium", 7: "low"})

    def test_items_beyond_horizon_are_ignored(self):
        """Test that offsets past days_ahead are not staged."""
        create_food_item(user=create_user(), expires_in_days=8)

        result = self.service.populate_queue(days_ahead=7)

        self.assertEqual(result.total_processed, 0)
        self.assertFalse(ExpiringItemQueueEntry.objects.exists())

    def test_default_horizon_comes_from_settings(self):
        """Test that days_ahead defaults to EXPIRY_QUEUE["DAYS_AHEAD"]."""
        with override_settings(EXPIRY_QUEUE={"DAYS_AHEAD": 2}):
            result = self.service.populate_queue()

        self.assertEqual(result.days_ahead, 2)
        self.assertEqual([r.days_ahead for r in result.results], [0, 1, 2])

    def test_owners_without_chat_destination_are_excluded(self):
        """Test that unreachable owners produce no rows."""
        create_food_item(user=create_user(chat_id=None), expires_in_days=1)
        create_food_item(user=None, expires_in_days=1)

        result = self.service.populate_queue(days_ahead=3)

        self.assertTrue(result.success)
        self.assertEqual(result.total_processed, 0)
        self.assertFalse(ExpiringItemQueueEntry.objects.exists())

    def test_second_run_stages_nothing_new(self):
        """Test idempotency: re-running leaves the queue unchanged."""
        user = create_user()
        create_food_item(user=user, expires_in_days=0)
        create_food_item(user=user, expires_in_days=5)

        first = self.service.populate_queue(days_ahead=7)
        count_after_first = ExpiringItemQueueEntry.objects.count()
        second = self.service.populate_queue(days_ahead=7)

        self.assertEqual(first.total_processed, 2)
        self.assertEqual(second.total_processed, 0)
        self.assertEqual(sum(r.already_queued for r in second.results), 2)
        self.assertEqual(ExpiringItemQueueEntry.objects.count(), count_after_first)

    def test_row_staged_concurrently_is_not_counted_as_written(self):
        """Test an overlapping run that stages the row after the lookup."""
        item = create_food_item(user=create_user(), expires_in_days=1)
        create_queue_entry(food_item=item, days_until_expiry=1)

        with patch.object(
            QueueRepository, "get_staged_item_ids", return_value=set()
        ):
            result = self.service.populate_queue(days_ahead=1)

        offset = result.results[1]
        self.assertEqual(offset.processed, 0)
        self.assertEqual(offset.already_queued, 1)
        self.assertEqual(result.total_processed, 0)
        self.assertEqual(ExpiringItemQueueEntry.objects.count(), 1)

    def test_rerun_does_not_reset_delivered_rows(self):
        """Test that a sent row stays sent after another populate run."""
        user = create_user()
        item = create_food_item(user=user, expires_in_days=1)
        entry = create_queue_entry(
            food_item=item, days_until_expiry=1, status=QueueStatus.SENT
        )

        self.service.populate_queue(days_ahead=7)

        entry.refresh_from_db()
        self.assertEqual(entry.status, QueueStatus.SENT.value)
        self.assertEqual(ExpiringItemQueueEntry.objects.count(), 1)

    def test_staging_is_batched(self):
        """Test that rows are written in POPULATE_BATCH_SIZE chunks."""
        user = create_user()
        for _ in range(5):
            create_food_item(user=user, expires_in_days=2)

        with (
            override_settings(EXPIRY_QUEUE={"POPULATE_BATCH_SIZE": 2}),
            patch.object(
                QueueRepository,
                "stage_entries",
                wraps=QueueRepository.stage_entries,
            ) as mock_stage,
        ):
            result = self.service.populate_queue(days_ahead=2)

        self.assertEqual(result.total_processed, 5)
        self.assertEqual(
            [len(call.args[0]) for call in mock_stage.call_args_list], [2, 2, 1]
        )

    def test_failed_offset_does_not_stop_the_others(self):
        """Test that a fetch error is reported for its offset only."""
        user = create_user()
        create_food_item(user=user, expires_in_days=0)
        create_food_item(user=user, expires_in_days=2)
        failing_date = timezone.localdate() + timedelta(days=1)
        real_fetch = InventoryRepository.get_items_expiring_on

        def fetch(expiration_date):
            if expiration_date == failing_date:
                raise DatabaseError("statement timeout")
            return real_fetch(expiration_date)

        with patch.object(
            InventoryRepository, "get_items_expiring_on", side_effect=fetch
        ):
            result = self.service.populate_queue(days_ahead=2)

        self.assertTrue(result.success)
        self.assertEqual(result.total_processed, 2)
        failed = result.results[1]
        self.assertTrue(failed.failed)
        self.assertIn("statement timeout", failed.error)
        self.assertIsNone(result.results[0].error)
        self.assertIsNone(result.results[2].error)

    def test_all_offsets_failing_reports_failure(self):
        """Test success=false only when every offset failed."""
        with patch.object(
            InventoryRepository,
            "get_items_expiring_on",
            side_effect=DatabaseError("connection refused"),
        ):
            result = self.service.populate_queue(days_ahead=1)

        self.assertFalse(result.success)
        self.assertTrue(all(r.failed for r in result.results))

    def test_failed_batch_is_counted_and_skipped(self):
        """Test that a write error only loses its own batch."""
        user = create_user()
        for _ in range(3):
            create_food_item(user=user, expires_in_days=1)
        real_stage = QueueRepository.stage_entries
        calls = []

        def stage(entries):
            calls.append(len(entries))
            if len(calls) == 1:
                raise DatabaseError("deadlock detected")
            return real_stage(entries)

        with (
            override_settings(EXPIRY_QUEUE={"POPULATE_BATCH_SIZE": 2}),
            patch.object(QueueRepository, "stage_entries", side_effect=stage),
        ):
            result = self.service.populate_queue(days_ahead=1)

        offset = result.results[1]
        self.assertEqual(offset.failed_batches, 1)
        self.assertEqual(offset.processed, 1)
        self.assertIn("deadlock", offset.error)
        self.assertFalse(offset.failed)
        self.assertTrue(result.success)

    def test_stale_rows_are_swept_before_staging(self):
        """Test the created_at sweep that runs at the start of each run."""
        stale = create_queue_entry(status=QueueStatus.SENT)
        ExpiringItemQueueEntry.objects.filter(pk=stale.pk).update(
            created_at=timezone.now() - timedelta(days=8)
        )

        result = self.service.populate_queue(days_ahead=0)

        self.assertEqual(result.cleaned_up, 1)
        self.assertFalse(ExpiringItemQueueEntry.objects.filter(pk=stale.pk).exists())

    def test_sweep_failure_does_not_stop_staging(self):
        """Test that a failing sweep is reported as cleaned_up=None."""
        create_food_item(user=create_user(), expires_in_days=0)

        with patch.object(
            QueueRepository,
            "delete_created_before",
            side_effect=DatabaseError("lock timeout"),
        ):
            result = self.service.populate_queue(days_ahead=0)

        self.assertIsNone(result.cleaned_up)
        self.assertEqual(result.total_processed, 1)

    def test_negative_horizon_is_rejected(self):
        """Test that days_ahead must not be negative."""
        with self.assertRaises(ValueError):
            self.service.populate_queue(days_ahead=-1)

    @override_settings(EXPIRY_QUEUE={"POPULATE_BATCH_SIZE": 0})
    def test_invalid_configuration_refuses_to_run(self):
        """Test that bad settings abort before touching the queue."""
        create_food_item(user=create_user(), expires_in_days=0)

        with self.assertRaises(ImproperlyConfigured):
            self.service.populate_queue(days_ahead=1)

        self.assertFalse(ExpiringItemQueueEntry.objects.exists())

    def test_job_context_is_cleared_after_run(self):
        """Test that the run id does not leak into later log events."""
        self.service.populate_queue(days_ahead=0)

        self.assertIsNone(get_job_context())
