from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from apps.common.constants import OrderStatus, PaymentStatus
from apps.common.models import BaseModel

# Derived amounts keep 4 decimal places so nothing is rounded at write time
AMOUNT_FIELD = {"max_digits": 14, "decimal_places": 4, "default": 0}


class Order(BaseModel):
    order_no = models.CharField(max_length=8, unique=True)  # for ex "K7Q2M9XA"
    table_number = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    waiter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="orders",
        db_column="waiter_id",
    )
    # Snapshot taken at creation; renaming the user does not rewrite history
    waiter_name = models.CharField(max_length=80)
    customer_name = models.CharField(max_length=120, default="Guest")
    customer_email = models.EmailField(blank=True)
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    subtotal = models.DecimalField(**AMOUNT_FIELD)
    tax = models.DecimalField(**AMOUNT_FIELD)
    service_charge = models.DecimalField(**AMOUNT_FIELD)
    total = models.DecimalField(**AMOUNT_FIELD)
    payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID)

    class Meta:
        db_table = "order"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["table_number", "status"], name="order_table_status_idx"),
            models.Index(fields=["waiter"], name="order_waiter_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["created_at"], name="order_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["table_number"],
                condition=Q(status__in=["pending", "preparing", "served"]),
                name="one_active_order_per_table",
            ),
        ]

    def __str__(self):
        return f"{self.order_no} • table {self.table_number} • {self.waiter_name}"


class OrderItem(BaseModel):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
        db_column="order_id",
    )
    line_no = models.PositiveIntegerField()
    menu_item_id = models.CharField(max_length=64)
    name = models.CharField(max_length=150)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    # Client-generated token of the submission that added this line
    submission_key = models.CharField(max_length=64, blank=True, db_index=True)

    class Meta:
        db_table = "order_item"
        ordering = ["order", "line_no"]
        constraints = [
            models.UniqueConstraint(fields=["order", "line_no"], name="unique_order_line_no"),
        ]

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    def __str__(self):
        return f"{self.order.order_no} · {self.name} × {self.quantity}"
