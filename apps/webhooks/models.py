from django.db import models

from apps.common.models import BaseModel
from apps.payments.models import PaymentSession


class WebhookStatus(models.TextChoices):
    RECEIVED = "received", "Received"
    PROCESSING = "processing", "Processing"
    COMPLETED = "completed", "Completed"
    IGNORED = "ignored", "Ignored"
    FAILED = "failed", "Failed"


class StripeEvent(BaseModel):
    """A Stripe delivery, keyed by Stripe's event id. Completed or ignored events are never reprocessed."""

    event_id = models.CharField(max_length=255, unique=True)
    event_type = models.CharField(max_length=100)
    # Checkout session (or other Stripe object) the event is about
    object_id = models.CharField(max_length=255, blank=True, db_index=True)
    payment_session = models.ForeignKey(
        PaymentSession,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stripe_events",
        db_column="payment_session_id",
    )
    payload = models.JSONField()
    status = models.CharField(max_length=20, choices=WebhookStatus.choices, default=WebhookStatus.RECEIVED)
    attempts = models.PositiveSmallIntegerField(default=0)
    error_message = models.TextField(blank=True)
    processed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "stripe_event"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["status"], name="stripe_event_status_idx")]

    @property
    def is_settled(self) -> bool:
        return self.status in (WebhookStatus.COMPLETED, WebhookStatus.IGNORED)

    def __str__(self):
        return f"{self.event_type} • {self.event_id} • {self.status}"
