import logging

from django.utils import timezone

from apps.common.constants import PaymentSessionStatus
from apps.payments.models import PaymentSession
from apps.payments.services import settle_stripe_session
from apps.webhooks.models import StripeEvent, WebhookStatus

logger = logging.getLogger(__name__)

# Checkout payment states that mean the money has been captured
CAPTURED_PAYMENT_STATUSES = (None, "paid", "no_payment_required")


class StripeEventProcessor:
    """
    Applies a verified Stripe event to the payment sessions and orders it concerns.

    Every delivery is recorded as a StripeEvent. Redeliveries of a completed or ignored event
    are acknowledged without side effects; failed events are retried on the next delivery.
    """

    routes = {
        "checkout.session.completed": "_on_checkout_completed",
        "checkout.session.expired": "_on_checkout_expired",
    }

    def __init__(self, event):
        if not event:
            raise ValueError("A verified Stripe event is required")
        self.event = event
        self.obj = event["data"]["object"]

    def process(self) -> StripeEvent:
        record = self._record()
        if record.is_settled:
            logger.info(f"Stripe event {record.event_id} already {record.status}, skipping")
            return record

        record.status = WebhookStatus.PROCESSING
        record.attempts += 1
        record.save(update_fields=["status", "attempts", "updated_at"])

        route = self.routes.get(record.event_type)
        try:
            handled = getattr(self, route)() if route else False
        except Exception as e:
            record.status = WebhookStatus.FAILED
            record.error_message = str(e)
            record.save(update_fields=["status", "error_message", "updated_at"])
            logger.error(f"Stripe event {record.event_id} failed on attempt {record.attempts}: {e}", exc_info=True)
            raise

        record.status = WebhookStatus.COMPLETED if handled else WebhookStatus.IGNORED
        record.error_message = ""
        record.processed_at = timezone.now()
        record.save(update_fields=["status", "error_message", "processed_at", "updated_at"])

        logger.info(f"Stripe event {record.event_id} ({record.event_type}) {record.status}")
        return record

    def _record(self) -> StripeEvent:
        object_id = self.obj.get("id", "")
        record, created = StripeEvent.objects.get_or_create(
            event_id=self.event["id"],
            defaults={
                "event_type": self.event["type"],
                "object_id": object_id,
                "payment_session": PaymentSession.objects.filter(stripe_session_id=object_id).first(),
                "payload": self.event,
            },
        )
        if not created:
            logger.info(f"Stripe event {record.event_id} redelivered (status {record.status})")
        return record

    def _on_checkout_completed(self) -> bool:
        payment_status = self.obj.get("payment_status")
        if payment_status not in CAPTURED_PAYMENT_STATUSES:
            # Delayed payment methods complete the session before funds arrive
            logger.info(f"Checkout {self.obj['id']} completed with payment_status={payment_status}")
            return False

        if not PaymentSession.objects.filter(stripe_session_id=self.obj["id"]).exists():
            # Sessions opened elsewhere are not ours to settle
            logger.warning(f"Checkout {self.obj['id']} completed for an unknown payment session, ignoring")
            return False

        settle_stripe_session(self.obj["id"], self.obj.get("payment_intent") or "")
        return True

    def _on_checkout_expired(self) -> bool:
        cancelled = PaymentSession.objects.filter(
            stripe_session_id=self.obj["id"], status=PaymentSessionStatus.PENDING
        ).update(status=PaymentSessionStatus.CANCELLED, updated_at=timezone.now())

        logger.info(f"Checkout {self.obj['id']} expired; {cancelled} payment session(s) cancelled")
        return cancelled > 0
