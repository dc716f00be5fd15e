from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.common.constants import UserRole

User = get_user_model()


class StaffSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "is_active", "created_at"]
        read_only_fields = fields


class StaffListSerializer(serializers.Serializer):
    waiters = StaffSerializer(many=True)
    chefs = StaffSerializer(many=True)


class StaffCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=80)
    pin = serializers.RegexField(
        r"^\d{4,8}$",
        write_only=True,
        error_messages={"invalid": "PIN must be 4 to 8 digits."},
    )
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.WAITER)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value
