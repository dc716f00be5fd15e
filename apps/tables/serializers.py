from rest_framework import serializers

from apps.common.constants import TableStatus
from apps.tables.models import Table


class TableSerializer(serializers.ModelSerializer):
    current_waiter_name = serializers.CharField(source="current_waiter.name", read_only=True, default=None)

    class Meta:
        model = Table
        fields = ["id", "number", "name", "seating_capacity", "status", "current_waiter", "current_waiter_name"]
        read_only_fields = fields


class TableCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=80)
    number = serializers.IntegerField(min_value=1)
    seating_capacity = serializers.IntegerField(min_value=1, default=4)


class TableStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TableStatus.choices)
