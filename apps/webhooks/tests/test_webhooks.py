import json
from unittest import mock

from django.test import override_settings
from django.urls import reverse

import pytest
import stripe

from apps.common.constants import OrderStatus, PaymentSessionStatus, TableStatus
from apps.orders.services import submit_order
from apps.payments.services import PaymentError
from apps.payments.tests.factories import PaymentSessionFactory
from apps.webhooks.models import StripeEvent, WebhookStatus

pytestmark = [pytest.mark.django_db, pytest.mark.usefixtures("webhook_secret")]

ITEMS = [{"menu_item_id": "m-biryani", "name": "Biryani", "unit_price": "300.00", "quantity": 1}]


@pytest.fixture
def webhook_secret():
    with override_settings(STRIPE_WEBHOOK_SECRET="whsec_test"):
        yield


@pytest.fixture
def payment(table, waiter):
    order = submit_order(table.number, waiter, ITEMS).order
    return PaymentSessionFactory(order=order, stripe_session_id="cs_test_paid")


def stripe_event(event_type, session_id="cs_test_paid", event_id="evt_1", **session_fields):
    return {
        "id": event_id,
        "type": event_type,
        "data": {"object": {"id": session_id, "object": "checkout.session", **session_fields}},
    }


def deliver(api_client, event, signature="t=1,v1=signed"):
    headers = {"HTTP_STRIPE_SIGNATURE": signature} if signature else {}
    with mock.patch("stripe.Webhook.construct_event", return_value=event) as construct:
        response = api_client.post(
            reverse("webhooks:stripe-webhook"), json.dumps(event), content_type="application/json", **headers
        )
    return response, construct


def test_completed_checkout_settles_order(api_client, payment, table):
    event = stripe_event("checkout.session.completed", payment_status="paid", payment_intent="pi_1")

    response, construct = deliver(api_client, event)

    assert response.status_code == 200
    assert response.data == {"received": True, "status": WebhookStatus.COMPLETED}
    assert construct.call_args.args[1:] == ("t=1,v1=signed", "whsec_test")

    payment.refresh_from_db()
    assert payment.status == PaymentSessionStatus.COMPLETED
    assert payment.stripe_payment_intent_id == "pi_1"
    payment.order.refresh_from_db()
    assert payment.order.status == OrderStatus.PAID
    table.refresh_from_db()
    assert table.status == TableStatus.AVAILABLE

    record = StripeEvent.objects.get(event_id="evt_1")
    assert record.object_id == "cs_test_paid"
    assert record.payment_session == payment
    assert record.attempts == 1
    assert record.processed_at is not None


def test_redelivery_is_processed_once(api_client, payment):
    event = stripe_event("checkout.session.completed", payment_status="paid")

    deliver(api_client, event)
    with mock.patch("apps.webhooks.handlers.settle_stripe_session") as settle:
        response, _ = deliver(api_client, event)

    assert response.status_code == 200
    settle.assert_not_called()
    record = StripeEvent.objects.get()
    assert record.attempts == 1


def test_unpaid_completion_is_ignored(api_client, payment):
    response, _ = deliver(api_client, stripe_event("checkout.session.completed", payment_status="unpaid"))

    assert response.data["status"] == WebhookStatus.IGNORED
    payment.refresh_from_db()
    assert payment.status == PaymentSessionStatus.PENDING
    payment.order.refresh_from_db()
    assert payment.order.status == OrderStatus.PENDING


def test_expired_checkout_cancels_payment_session(api_client, payment):
    response, _ = deliver(api_client, stripe_event("checkout.session.expired"))

    assert response.data["status"] == WebhookStatus.COMPLETED
    payment.refresh_from_db()
    assert payment.status == PaymentSessionStatus.CANCELLED
    payment.order.refresh_from_db()
    assert payment.order.status == OrderStatus.PENDING


def test_unhandled_event_is_acknowledged(api_client):
    response, _ = deliver(api_client, stripe_event("payment_intent.created", session_id="pi_9", event_id="evt_9"))

    assert response.status_code == 200
    assert StripeEvent.objects.get(event_id="evt_9").status == WebhookStatus.IGNORED


def test_unknown_payment_session_is_ignored(api_client):
    event = stripe_event("checkout.session.completed", session_id="cs_foreign", event_id="evt_2", payment_status="paid")

    response, _ = deliver(api_client, event)

    assert response.status_code == 200
    assert response.data["status"] == WebhookStatus.IGNORED
    record = StripeEvent.objects.get(event_id="evt_2")
    assert record.payment_session is None


def test_failed_event_is_retried_on_redelivery(api_client, payment):
    event = stripe_event("checkout.session.completed", event_id="evt_3", payment_status="paid")
    outage = PaymentError("Settlement temporarily unavailable", 503)

    with mock.patch("apps.webhooks.handlers.settle_stripe_session", side_effect=outage):
        response, _ = deliver(api_client, event)

    assert response.status_code == 503
    record = StripeEvent.objects.get(event_id="evt_3")
    assert record.status == WebhookStatus.FAILED
    assert record.error_message == "Settlement temporarily unavailable"

    response, _ = deliver(api_client, event)

    assert response.status_code == 200
    record.refresh_from_db()
    assert record.status == WebhookStatus.COMPLETED
    assert record.attempts == 2
    assert record.error_message == ""
    payment.order.refresh_from_db()
    assert payment.order.status == OrderStatus.PAID


def test_missing_signature(api_client):
    response, construct = deliver(api_client, stripe_event("checkout.session.completed"), signature=None)

    assert response.status_code == 403
    construct.assert_not_called()
    assert not StripeEvent.objects.exists()


def test_invalid_signature(api_client):
    event = stripe_event("checkout.session.completed")
    error = stripe.SignatureVerificationError("No signatures found", "t=1,v1=forged")

    with mock.patch("stripe.Webhook.construct_event", side_effect=error):
        response = api_client.post(
            reverse("webhooks:stripe-webhook"),
            json.dumps(event),
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE="t=1,v1=forged",
        )

    assert response.status_code == 403
    assert not StripeEvent.objects.exists()


@override_settings(STRIPE_WEBHOOK_SECRET="")
def test_unconfigured_secret_rejects_everything(api_client):
    response, construct = deliver(api_client, stripe_event("checkout.session.completed"))

    assert response.status_code == 403
    construct.assert_not_called()
