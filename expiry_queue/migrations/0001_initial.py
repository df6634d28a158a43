import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="FoodItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("user_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("name", models.TextField()),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=12)),
                ("unit", models.TextField()),
                ("expiration_date", models.DateField(db_index=True)),
                ("category", models.TextField()),
                ("image_url", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "food_items",
                "ordering": ["expiration_date", "name"],
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="User",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("email", models.EmailField(blank=True, max_length=255, null=True)),
                (
                    "chat_id",
                    models.BigIntegerField(
                        blank=True,
                        help_text="Telegram chat ID for bot interactions",
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "users",
                "ordering": ["-created_at"],
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="ExpiringItemQueueEntry",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the queue entry",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("user_id", models.UUIDField(help_text="Owner of the food item")),
                (
                    "chat_id",
                    models.BigIntegerField(
                        help_text="Telegram chat receiving the reminder"
                    ),
                ),
                ("item_name", models.TextField()),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=12)),
                ("unit", models.TextField()),
                ("expiration_date", models.DateField()),
                ("category", models.TextField()),
                ("days_until_expiry", models.IntegerField()),
                (
                    "notification_priority",
                    models.CharField(
                        choices=[
                            ("urgent", "Urgent"),
                            ("high", "High"),
                            ("medium", "Medium"),
                            ("low", "Low"),
                        ],
                        help_text=(
                            "low (7+ days), medium (3-6), high (1-2), urgent (today)"
                        ),
                        max_length=10,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("processing", "Processing"),
                            ("sent", "Sent"),
                            ("failed", "Failed"),
                        ],
                        default="pending",
                        help_text="Processing status: pending, processing, sent, failed",
                        max_length=20,
                    ),
                ),
                (
                    "scheduled_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
                ("error_message", models.TextField(blank=True, null=True)),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "food_item",
                    models.ForeignKey(
                        db_column="food_item_id",
                        help_text="Inventory item the reminder is about",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="queue_entries",
                        to="expiry_queue.fooditem",
                    ),
                ),
            ],
            options={
                "db_table": "expiring_items_queue",
                "ordering": ["scheduled_at"],
                "indexes": [
                    models.Index(fields=["status"], name="idx_expiring_queue_status"),
                    models.Index(
                        fields=["scheduled_at"], name="idx_expiring_queue_sched"
                    ),
                    models.Index(fields=["user_id"], name="idx_expiring_queue_user_id"),
                    models.Index(
                        fields=["expiration_date"], name="idx_expiring_queue_exp"
                    ),
                    models.Index(
                        fields=["created_at"], name="idx_expiring_queue_created"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("food_item", "days_until_expiry"),
                        name="uniq_queue_item_days_until_expiry",
                    )
                ],
            },
        ),
    ]
