from django.db import models

from apps.common.constants import PaymentProvider, PaymentSessionStatus
from apps.common.models import BaseModel
from apps.orders.models import Order

INVOICE_AMOUNT = {"max_digits": 12, "decimal_places": 2}


class PaymentSession(BaseModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="payment_sessions", db_column="order_id")
    provider = models.CharField(max_length=20, choices=PaymentProvider.choices, default=PaymentProvider.STRIPE)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="inr")
    status = models.CharField(
        max_length=20, choices=PaymentSessionStatus.choices, default=PaymentSessionStatus.PENDING
    )
    stripe_session_id = models.CharField(max_length=255, unique=True, null=True, blank=True)
    stripe_payment_intent_id = models.CharField(max_length=255, blank=True)
    expires_at = models.DateTimeField()

    class Meta:
        db_table = "payment_session"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["order", "status"], name="payment_order_status_idx")]

    def __str__(self):
        return f"{self.get_provider_display()} • {self.order.order_no} • {self.amount} {self.currency.upper()}"


class Invoice(BaseModel):
    invoice_no = models.CharField(max_length=40, unique=True)  # INV-<epoch ms>-<4 digits>
    order = models.ForeignKey(Order, on_delete=models.PROTECT, related_name="invoices", db_column="order_id")
    table_number = models.PositiveIntegerField()
    subtotal = models.DecimalField(**INVOICE_AMOUNT)
    tax = models.DecimalField(**INVOICE_AMOUNT)
    service_charge = models.DecimalField(**INVOICE_AMOUNT)
    total = models.DecimalField(**INVOICE_AMOUNT)
    payment_method = models.CharField(max_length=20, default="cash")
    restaurant_name = models.CharField(max_length=120)

    class Meta:
        db_table = "invoice"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.invoice_no} • {self.order.order_no}"
