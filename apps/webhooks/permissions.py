import logging

from rest_framework import permissions

from apps.webhooks.services import StripeWebhookError, verify_webhook_signature

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "HTTP_STRIPE_SIGNATURE"


class HasValidStripeSignature(permissions.BasePermission):
    """Only Stripe may call the endpoint; the verified event is kept on ``request.stripe_event``."""

    message = "Invalid Stripe signature"

    def has_permission(self, request, view):
        signature = request.META.get(SIGNATURE_HEADER)
        if not signature:
            logger.warning("Stripe webhook rejected: no Stripe-Signature header")
            return False

        try:
            request.stripe_event = verify_webhook_signature(request.body, signature)
        except StripeWebhookError as e:
            logger.warning(f"Stripe webhook rejected: {e.message}")
            return False
        return True
