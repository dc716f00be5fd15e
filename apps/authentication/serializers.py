from rest_framework import serializers

from apps.authentication.models import Session


class LoginSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=80)
    pin = serializers.CharField(max_length=16, write_only=True, trim_whitespace=False)


class SessionUserSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)


class LoginResponseSerializer(serializers.Serializer):
    user = SessionUserSerializer(read_only=True)
    token = serializers.CharField(read_only=True)
    expires_at = serializers.DateTimeField(read_only=True)


class MeSerializer(serializers.Serializer):
    userId = serializers.UUIDField(source="id", read_only=True)
    name = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)


class SessionSerializer(serializers.ModelSerializer):
    current = serializers.SerializerMethodField()

    class Meta:
        model = Session
        fields = ["token", "ip", "user_agent", "created_at", "last_used_at", "expires_at", "current"]
        read_only_fields = fields

    def get_current(self, obj):
        current = self.context.get("current_token")
        return bool(current) and obj.token == current
