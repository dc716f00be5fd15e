from django.conf import settings
from django.db import models
from django.utils import timezone


class Session(models.Model):
    token = models.CharField(max_length=64, unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="pos_sessions",
        db_column="user_id",
    )
    user_name = models.CharField(max_length=80)
    user_role = models.CharField(max_length=20)
    ip = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    last_used_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField()

    class Meta:
        db_table = "session"
        indexes = [
            models.Index(fields=["user", "expires_at"], name="session_user_expires_idx"),
            models.Index(fields=["expires_at"], name="session_expires_idx"),
        ]
        ordering = ["-created_at"]

    @property
    def is_expired(self) -> bool:
        return self.expires_at <= timezone.now()

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"Session(user={self.user_name}, expires={self.expires_at:%Y-%m-%d %H:%M})"
