from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from apps.common.constants import TableStatus
from apps.common.models import BaseModel


class Table(BaseModel):
    number = models.PositiveIntegerField(unique=True, validators=[MinValueValidator(1)])
    name = models.CharField(max_length=80)
    seating_capacity = models.PositiveIntegerField(default=4)
    status = models.CharField(max_length=20, choices=TableStatus.choices, default=TableStatus.AVAILABLE)
    # Holder of the table lock while an order is open
    current_waiter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="locked_tables",
        db_column="current_waiter_id",
    )

    class Meta:
        db_table = "restaurant_table"
        ordering = ["number"]
        indexes = [models.Index(fields=["status"], name="table_status_idx")]
        constraints = [
            models.CheckConstraint(
                name="available_table_has_no_waiter",
                condition=~Q(status="available") | Q(current_waiter__isnull=True),
            ),
        ]

    def __str__(self):
        return f"Table {self.number} • {self.name}"
