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
            name="Table",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "number",
                    models.PositiveIntegerField(unique=True, validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("name", models.CharField(max_length=80)),
                ("seating_capacity", models.PositiveIntegerField(default=4)),
                (
                    "status",
                    models.CharField(
                        choices=[("available", "Available"), ("occupied", "Occupied"), ("reserved", "Reserved")],
                        default="available",
                        max_length=20,
                    ),
                ),
                (
                    "current_waiter",
                    models.ForeignKey(
                        blank=True,
                        db_column="current_waiter_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="locked_tables",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "restaurant_table",
                "ordering": ["number"],
                "indexes": [models.Index(fields=["status"], name="table_status_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("status", "available"), _negated=True)
                        | models.Q(("current_waiter__isnull", True)),
                        name="available_table_has_no_waiter",
                    )
                ],
            },
        ),
    ]
