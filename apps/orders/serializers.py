from rest_framework import serializers

from apps.common.constants import OrderStatus
from apps.orders.models import Order, OrderItem


class LineItemSerializer(serializers.Serializer):
    menu_item_id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=120)
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    quantity = serializers.IntegerField(min_value=1)


class OrderSubmitSerializer(serializers.Serializer):
    table_number = serializers.IntegerField(min_value=1)
    items = LineItemSerializer(many=True, allow_empty=False)
    customer_name = serializers.CharField(max_length=120, required=False, allow_blank=True)
    customer_email = serializers.EmailField(required=False, allow_blank=True)
    submission_key = serializers.CharField(max_length=64, required=False, allow_blank=True)


class OrderSubmitResponseSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    order_no = serializers.CharField()
    created = serializers.BooleanField()


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class OrderItemSerializer(serializers.ModelSerializer):
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["line_no", "menu_item_id", "name", "unit_price", "quantity", "line_total", "submission_key"]


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_no",
            "table_number",
            "waiter",
            "waiter_name",
            "customer_name",
            "customer_email",
            "items",
            "status",
            "payment_status",
            "subtotal",
            "tax",
            "service_charge",
            "total",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
