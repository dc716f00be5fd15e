from rest_framework import serializers

from apps.orders.serializers import OrderItemSerializer
from apps.payments.models import Invoice

PAYMENT_METHODS = ["cash", "card", "upi"]


class OrderReferenceSerializer(serializers.Serializer):
    order = serializers.CharField(max_length=64, help_text="Order UUID or order number")


class CheckoutSessionResponseSerializer(serializers.Serializer):
    session_id = serializers.CharField(read_only=True, help_text="Stripe checkout session ID")
    url = serializers.URLField(read_only=True, help_text="Hosted checkout page")
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    currency = serializers.CharField(read_only=True)


class SessionStatusResponseSerializer(serializers.Serializer):
    status = serializers.CharField(read_only=True, help_text="Session status (open, complete, expired)")
    payment_status = serializers.CharField(read_only=True, help_text="Payment status (paid, unpaid)")
    amount_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    currency = serializers.CharField(read_only=True)
    order_no = serializers.CharField(read_only=True, allow_null=True)
    payment_session_status = serializers.CharField(read_only=True, allow_null=True)


class UpiQrResponseSerializer(serializers.Serializer):
    order_no = serializers.CharField(read_only=True)
    upi_uri = serializers.CharField(read_only=True)
    qr_code = serializers.CharField(read_only=True, help_text="Base64 encoded PNG")
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


class InvoiceCreateSerializer(OrderReferenceSerializer):
    payment_method = serializers.ChoiceField(choices=PAYMENT_METHODS, default="cash")


class InvoiceSerializer(serializers.ModelSerializer):
    order_no = serializers.CharField(source="order.order_no", read_only=True)
    customer_name = serializers.CharField(source="order.customer_name", read_only=True)
    waiter_name = serializers.CharField(source="order.waiter_name", read_only=True)
    items = OrderItemSerializer(source="order.items", many=True, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "invoice_no",
            "restaurant_name",
            "order_no",
            "table_number",
            "customer_name",
            "waiter_name",
            "items",
            "subtotal",
            "tax",
            "service_charge",
            "total",
            "payment_method",
            "created_at",
        ]
        read_only_fields = fields
