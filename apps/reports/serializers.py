from rest_framework import serializers

from apps.reports.services import SCOPES


class SummaryQuerySerializer(serializers.Serializer):
    scope = serializers.ChoiceField(choices=SCOPES, default="day")
    as_of = serializers.DateTimeField(required=False)


class WaiterRevenueSerializer(serializers.Serializer):
    waiter_name = serializers.CharField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    orders = serializers.IntegerField()


class TableRevenueSerializer(serializers.Serializer):
    table_number = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    orders = serializers.IntegerField()


class SummarySerializer(serializers.Serializer):
    scope = serializers.CharField()
    window_start = serializers.DateTimeField(allow_null=True)
    window_end = serializers.DateTimeField(allow_null=True)
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    paid_orders = serializers.IntegerField()
    average_order_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    order_count = serializers.IntegerField()
    completion_rate = serializers.IntegerField()
    status_counts = serializers.DictField(child=serializers.IntegerField())
    waiter_revenue = WaiterRevenueSerializer(many=True)
    table_revenue = TableRevenueSerializer(many=True)
