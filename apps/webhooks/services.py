import logging

import stripe
from django.conf import settings
from rest_framework import status

from apps.common.exceptions import ServiceError

logger = logging.getLogger(__name__)


class StripeWebhookError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


def verify_webhook_signature(payload: bytes, sig_header: str):
    """Check the Stripe-Signature header against the endpoint secret and return the parsed event."""
    if not settings.STRIPE_WEBHOOK_SECRET:
        raise StripeWebhookError("Stripe webhook secret is not configured")

    try:
        return stripe.Webhook.construct_event(payload, sig_header, settings.STRIPE_WEBHOOK_SECRET)
    except ValueError as e:
        logger.error(f"Invalid webhook payload: {e}")
        raise StripeWebhookError("Invalid payload") from e
    except stripe.SignatureVerificationError as e:
        logger.error(f"Invalid webhook signature: {e}")
        raise StripeWebhookError("Invalid signature") from e
