import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("order_no", models.CharField(max_length=8, unique=True)),
                (
                    "table_number",
                    models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("waiter_name", models.CharField(max_length=80)),
                ("customer_name", models.CharField(default="Guest", max_length=120)),
                ("customer_email", models.EmailField(blank=True, max_length=254)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("preparing", "Preparing"),
                            ("served", "Served"),
                            ("paid", "Paid"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("subtotal", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                ("tax", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                ("service_charge", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                ("total", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("unpaid", "Unpaid"), ("paid", "Paid")],
                        default="unpaid",
                        max_length=20,
                    ),
                ),
                (
                    "waiter",
                    models.ForeignKey(
                        db_column="waiter_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "order",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["table_number", "status"], name="order_table_status_idx"),
                    models.Index(fields=["waiter"], name="order_waiter_idx"),
                    models.Index(fields=["status"], name="order_status_idx"),
                    models.Index(fields=["created_at"], name="order_created_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status__in", ["pending", "preparing", "served"])),
                        fields=("table_number",),
                        name="one_active_order_per_table",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("line_no", models.PositiveIntegerField()),
                ("menu_item_id", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=150)),
                (
                    "unit_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("submission_key", models.CharField(blank=True, db_index=True, max_length=64)),
                (
                    "order",
                    models.ForeignKey(
                        db_column="order_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_item",
                "ordering": ["order", "line_no"],
                "constraints": [
                    models.UniqueConstraint(fields=("order", "line_no"), name="unique_order_line_no"),
                ],
            },
        ),
    ]
