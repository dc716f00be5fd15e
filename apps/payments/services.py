import base64
import logging
import secrets
import time
from datetime import timedelta
from io import BytesIO
from urllib.parse import quote, urlencode

import qrcode
import stripe
from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework import status

from apps.common.constants import OrderStatus, PaymentProvider, PaymentSessionStatus, PaymentStatus
from apps.common.exceptions import ServiceError
from apps.orders.models import Order
from apps.orders.services import InvalidTransitionError, Totals, advance_status, get_order
from apps.payments.models import Invoice, PaymentSession

logger = logging.getLogger(__name__)

PAYMENT_SESSION_TTL = timedelta(hours=24)


class PaymentError(ServiceError):
    pass


def order_totals(order: Order) -> Totals:
    """Rounded figures billed to the guest."""
    return Totals(
        subtotal=order.subtotal,
        tax=order.tax,
        service_charge=order.service_charge,
        total=order.total,
    ).rounded()


def _get_payable_order(order_ref) -> Order:
    order = get_order(order_ref)
    if order.status == OrderStatus.CANCELLED:
        raise PaymentError(f"Order {order.order_no} was cancelled.", status.HTTP_409_CONFLICT)
    if order.payment_status == PaymentStatus.PAID:
        raise PaymentError(f"Order {order.order_no} is already paid.", status.HTTP_409_CONFLICT)
    return order


class StripeService:
    """
    Stripe Checkout for settling an order by card.
    The order is marked paid by the checkout.session.completed webhook, not here.
    """

    def __init__(self):
        stripe.api_key = settings.STRIPE_SECRET_KEY
        self.stripe = stripe
        self.settings = settings

    def create_checkout_session(self, order_ref) -> dict:
        order = _get_payable_order(order_ref)
        amount = order_totals(order).total
        currency = self.settings.STRIPE_CURRENCY
        frontend_url = self.settings.FRONTEND_URL.rstrip("/")

        try:
            session = self.stripe.checkout.Session.create(
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "product_data": {
                                "name": f"Order #{order.order_no}",
                                "description": f"Restaurant order for table {order.table_number}",
                            },
                            # Stripe expects minor units
                            "unit_amount": int(amount * 100),
                        },
                        "quantity": 1,
                    }
                ],
                mode="payment",
                success_url=f"{frontend_url}/payment/success?session_id={{CHECKOUT_SESSION_ID}}&order={order.order_no}",
                cancel_url=f"{frontend_url}/payment/cancelled?order={order.order_no}",
                metadata={"order_id": str(order.id), "order_no": order.order_no},
            )
        except self.stripe.StripeError as e:
            logger.error(f"Stripe checkout failed for order {order.order_no}: {e}")
            raise PaymentError(f"Failed to create checkout session: {str(e)}", status.HTTP_502_BAD_GATEWAY) from e

        PaymentSession.objects.create(
            order=order,
            provider=PaymentProvider.STRIPE,
            amount=amount,
            currency=currency,
            status=PaymentSessionStatus.PENDING,
            stripe_session_id=session.id,
            expires_at=timezone.now() + PAYMENT_SESSION_TTL,
        )
        logger.info(f"Stripe checkout {session.id} opened for order {order.order_no} ({amount} {currency.upper()})")

        return {
            "session_id": session.id,
            "url": session.url,
            "amount": amount,
            "currency": currency,
        }

    def retrieve_session_status(self, session_id: str) -> dict:
        try:
            session = self.stripe.checkout.Session.retrieve(session_id)
        except self.stripe.StripeError as e:
            raise PaymentError(f"Failed to retrieve session status: {str(e)}", status.HTTP_502_BAD_GATEWAY) from e

        payment = PaymentSession.objects.select_related("order").filter(stripe_session_id=session_id).first()
        return {
            "status": session.status,
            "payment_status": session.payment_status,
            "amount_total": session.amount_total / 100 if session.amount_total else 0,
            "currency": session.currency,
            "order_no": payment.order.order_no if payment else None,
            "payment_session_status": payment.status if payment else None,
        }


@transaction.atomic
def settle_stripe_session(stripe_session_id: str, payment_intent_id: str = "") -> PaymentSession:
    """Mark a Stripe payment session completed and move its order to paid."""
    payment = PaymentSession.objects.select_for_update().filter(stripe_session_id=stripe_session_id).first()
    if payment is None:
        raise PaymentError(f"Payment session not found for {stripe_session_id}", status.HTTP_404_NOT_FOUND)

    if payment.status == PaymentSessionStatus.COMPLETED:
        logger.info(f"Payment session {stripe_session_id} already completed, skipping")
        return payment

    payment.status = PaymentSessionStatus.COMPLETED
    payment.stripe_payment_intent_id = payment_intent_id or ""
    payment.save(update_fields=["status", "stripe_payment_intent_id", "updated_at"])

    try:
        order = advance_status(payment.order_id, OrderStatus.PAID)
    except InvalidTransitionError:
        # Money was captured for an order that can no longer be paid
        logger.error(f"Payment {stripe_session_id} completed for cancelled order {payment.order_id}; refund required")
        return payment

    logger.info(f"Order {order.order_no} settled by Stripe session {stripe_session_id}")
    return payment


def build_upi_uri(order: Order, amount) -> str:
    params = {
        "pa": settings.UPI_ID,
        "pn": settings.UPI_PAYEE_NAME,
        "am": f"{amount:.2f}",
        "tr": order.order_no,
        "tn": f"Order #{order.order_no}",
    }
    return "upi://pay?" + urlencode(params, quote_via=quote, safe="@")


def generate_upi_qr(order_ref) -> dict:
    order = _get_payable_order(order_ref)
    amount = order_totals(order).total
    upi_uri = build_upi_uri(order, amount)

    qr = qrcode.QRCode(error_correction=qrcode.constants.ERROR_CORRECT_H, box_size=10, border=1)
    qr.add_data(upi_uri)
    qr.make(fit=True)
    qr_img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    qr_img.save(buffer, format="PNG")
    qr_code_b64 = base64.b64encode(buffer.getvalue()).decode()

    PaymentSession.objects.create(
        order=order,
        provider=PaymentProvider.UPI,
        amount=amount,
        currency="inr",
        status=PaymentSessionStatus.PENDING,
        expires_at=timezone.now() + PAYMENT_SESSION_TTL,
    )
    logger.info(f"UPI QR generated for order {order.order_no} ({amount})")

    return {
        "order_no": order.order_no,
        "upi_uri": upi_uri,
        "qr_code": qr_code_b64,
        "amount": amount,
    }


def _generate_invoice_no():
    while True:
        invoice_no = f"INV-{int(time.time() * 1000)}-{secrets.randbelow(10000):04d}"
        if not Invoice.objects.filter(invoice_no=invoice_no).exists():
            return invoice_no


@transaction.atomic
def issue_invoice(order_ref, payment_method: str = "cash") -> Invoice:
    order = get_order(order_ref)
    if order.status == OrderStatus.CANCELLED:
        raise PaymentError(f"Order {order.order_no} was cancelled and cannot be invoiced.", status.HTTP_409_CONFLICT)

    totals = order_totals(order)
    invoice = Invoice.objects.create(
        invoice_no=_generate_invoice_no(),
        order=order,
        table_number=order.table_number,
        subtotal=totals.subtotal,
        tax=totals.tax,
        service_charge=totals.service_charge,
        total=totals.total,
        payment_method=payment_method,
        restaurant_name=settings.RESTAURANT_NAME,
    )
    logger.info(f"Invoice {invoice.invoice_no} issued for order {order.order_no}")
    return invoice
