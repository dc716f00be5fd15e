import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=150)),
                ("description", models.TextField(blank=True)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("starters", "Starters"),
                            ("main_course", "Main Course"),
                            ("desserts", "Desserts"),
                            ("drinks", "Drinks"),
                        ],
                        max_length=20,
                    ),
                ),
                ("image", models.URLField(blank=True, max_length=500)),
                ("available", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "menu_item",
                "ordering": ("category", "name"),
                "indexes": [models.Index(fields=["available", "category"], name="menu_item_avail_cat_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("category", "name"), name="unique_menu_item_per_category"),
                ],
            },
        ),
    ]
