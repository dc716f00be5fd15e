import base64
import re
from decimal import Decimal
from types import SimpleNamespace
from unittest import mock

from django.test import override_settings

import pytest
import stripe

from apps.common.constants import OrderStatus, PaymentProvider, PaymentSessionStatus, PaymentStatus, TableStatus
from apps.orders.services import advance_status, submit_order
from apps.payments.models import PaymentSession
from apps.payments.services import (
    PaymentError,
    StripeService,
    build_upi_uri,
    generate_upi_qr,
    issue_invoice,
    order_totals,
    settle_stripe_session,
)
from apps.payments.tests.factories import PaymentSessionFactory

pytestmark = pytest.mark.django_db

ITEMS = [
    {"menu_item_id": "m-paneer", "name": "Paneer Tikka", "unit_price": "350.00", "quantity": 1},
    {"menu_item_id": "m-lassi", "name": "Sweet Lassi", "unit_price": "50.00", "quantity": 2},
]


@pytest.fixture
def order(table, waiter):
    return submit_order(table.number, waiter, ITEMS).order


def stripe_session(session_id="cs_test_abc"):
    return SimpleNamespace(id=session_id, url=f"https://checkout.stripe.com/c/pay/{session_id}")


def test_order_totals_are_rounded(table, waiter):
    order = submit_order(
        table.number, waiter, [{"menu_item_id": "m-1", "name": "Soup", "unit_price": "33.33", "quantity": 1}]
    ).order

    totals = order_totals(order)

    assert (totals.subtotal, totals.tax, totals.service_charge, totals.total) == (
        Decimal("33.33"),
        Decimal("1.67"),
        Decimal("3.33"),
        Decimal("38.33"),
    )


class TestStripeCheckout:
    @override_settings(FRONTEND_URL="https://pos.example.com/", STRIPE_CURRENCY="inr")
    def test_creates_session_for_rounded_total(self, order):
        with mock.patch("stripe.checkout.Session.create", return_value=stripe_session()) as create:
            data = StripeService().create_checkout_session(order.order_no)

        kwargs = create.call_args.kwargs
        assert kwargs["line_items"][0]["price_data"]["unit_amount"] == 51750
        assert kwargs["metadata"] == {"order_id": str(order.id), "order_no": order.order_no}
        assert kwargs["cancel_url"] == f"https://pos.example.com/payment/cancelled?order={order.order_no}"
        assert data["session_id"] == "cs_test_abc"
        assert data["amount"] == Decimal("517.50")

        payment = PaymentSession.objects.get(stripe_session_id="cs_test_abc")
        assert payment.order == order
        assert payment.status == PaymentSessionStatus.PENDING

    def test_stripe_failure_is_a_bad_gateway(self, order):
        with mock.patch("stripe.checkout.Session.create", side_effect=stripe.StripeError("card network down")):
            with pytest.raises(PaymentError) as exc_info:
                StripeService().create_checkout_session(order.id)

        assert exc_info.value.status_code == 502
        assert not PaymentSession.objects.exists()

    @pytest.mark.parametrize("final_status", [OrderStatus.PAID, OrderStatus.CANCELLED])
    def test_closed_orders_cannot_be_paid(self, order, final_status):
        advance_status(order.id, final_status)

        with mock.patch("stripe.checkout.Session.create") as create:
            with pytest.raises(PaymentError) as exc_info:
                StripeService().create_checkout_session(order.id)

        assert exc_info.value.status_code == 409
        create.assert_not_called()

    def test_retrieve_session_status(self, order):
        PaymentSessionFactory(order=order, stripe_session_id="cs_test_abc")
        retrieved = SimpleNamespace(status="complete", payment_status="paid", amount_total=51750, currency="inr")

        with mock.patch("stripe.checkout.Session.retrieve", return_value=retrieved):
            data = StripeService().retrieve_session_status("cs_test_abc")

        assert data["amount_total"] == 517.5
        assert data["order_no"] == order.order_no
        assert data["payment_session_status"] == PaymentSessionStatus.PENDING


class TestSettleStripeSession:
    def test_marks_order_paid_and_releases_table(self, order, table):
        PaymentSessionFactory(order=order, stripe_session_id="cs_test_abc")

        payment = settle_stripe_session("cs_test_abc", "pi_123")

        assert payment.status == PaymentSessionStatus.COMPLETED
        assert payment.stripe_payment_intent_id == "pi_123"
        order.refresh_from_db()
        assert order.status == OrderStatus.PAID
        assert order.payment_status == PaymentStatus.PAID
        table.refresh_from_db()
        assert table.status == TableStatus.AVAILABLE

    def test_is_idempotent(self, order):
        PaymentSessionFactory(order=order, stripe_session_id="cs_test_abc")

        settle_stripe_session("cs_test_abc", "pi_123")
        payment = settle_stripe_session("cs_test_abc", "pi_other")

        assert payment.stripe_payment_intent_id == "pi_123"

    def test_cancelled_order_stays_cancelled(self, order):
        PaymentSessionFactory(order=order, stripe_session_id="cs_test_abc")
        advance_status(order.id, OrderStatus.CANCELLED)

        payment = settle_stripe_session("cs_test_abc")

        assert payment.status == PaymentSessionStatus.COMPLETED
        order.refresh_from_db()
        assert order.status == OrderStatus.CANCELLED

    def test_unknown_session(self):
        with pytest.raises(PaymentError) as exc_info:
            settle_stripe_session("cs_missing")
        assert exc_info.value.status_code == 404


class TestUpi:
    @override_settings(UPI_ID="restaurant@upi", UPI_PAYEE_NAME="RestaurantOrder")
    def test_uri(self, order):
        uri = build_upi_uri(order, Decimal("517.50"))

        assert uri == (
            f"upi://pay?pa=restaurant@upi&pn=RestaurantOrder&am=517.50"
            f"&tr={order.order_no}&tn=Order%20%23{order.order_no}"
        )

    def test_qr_code_is_a_png_of_the_rounded_total(self, order):
        data = generate_upi_qr(order.order_no)

        assert data["amount"] == Decimal("517.50")
        assert "am=517.50" in data["upi_uri"]
        assert base64.b64decode(data["qr_code"]).startswith(b"\x89PNG")
        assert PaymentSession.objects.filter(order=order, provider=PaymentProvider.UPI).count() == 1


class TestInvoice:
    @override_settings(RESTAURANT_NAME="Spice Route")
    def test_issue_invoice(self, order):
        invoice = issue_invoice(order.id, payment_method="upi")

        assert re.fullmatch(r"INV-\d{13}-\d{4}", invoice.invoice_no)
        assert invoice.restaurant_name == "Spice Route"
        assert invoice.table_number == order.table_number
        assert invoice.total == Decimal("517.50")
        assert invoice.payment_method == "upi"

    def test_invoice_numbers_are_unique(self, order):
        first = issue_invoice(order.id)
        second = issue_invoice(order.id)
        assert first.invoice_no != second.invoice_no

    def test_cancelled_order(self, order):
        advance_status(order.id, OrderStatus.CANCELLED)

        with pytest.raises(PaymentError) as exc_info:
            issue_invoice(order.id)
        assert exc_info.value.status_code == 409
