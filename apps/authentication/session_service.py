import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from apps.authentication.models import Session

logger = logging.getLogger(__name__)


def _session_ttl() -> timedelta:
    return timedelta(hours=getattr(settings, "SESSION_TOKEN_TTL_HOURS", 24))


def _client_ip(request):
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR") or None


class SessionService:
    @staticmethod
    def create_session(user, request=None) -> Session:
        """Bind a fresh random token to the user, snapshotting name and role."""
        now = timezone.now()
        ip = _client_ip(request) if request is not None else None
        user_agent = request.META.get("HTTP_USER_AGENT", "Unknown")[:255] if request is not None else ""

        session = Session.objects.create(
            token=secrets.token_urlsafe(32),
            user=user,
            user_name=user.name,
            user_role=user.role,
            ip=ip,
            user_agent=user_agent,
            created_at=now,
            last_used_at=now,
            expires_at=now + _session_ttl(),
        )
        logger.info(f"Session created for {user.name} ({user.role})")
        return session

    @staticmethod
    def resolve(token):
        """Return the live session for a token, or None if missing or expired."""
        if not token:
            return None

        session = Session.objects.select_related("user").filter(token=token).first()
        if session is None:
            return None

        if session.is_expired:
            session.delete()
            return None

        Session.objects.filter(pk=session.pk).update(last_used_at=timezone.now())
        return session

    @staticmethod
    def revoke_session(token) -> bool:
        deleted, _ = Session.objects.filter(token=token).delete()
        return deleted > 0

    @staticmethod
    def list_sessions(user):
        """List all live sessions for a user; expired ones are cleaned up on the way."""
        Session.objects.filter(user=user, expires_at__lte=timezone.now()).delete()
        return Session.objects.filter(user=user)

    @staticmethod
    def revoke_all_other_sessions(user, current_token) -> int:
        deleted, _ = Session.objects.filter(user=user).exclude(token=current_token).delete()
        return deleted

    @staticmethod
    def purge_expired() -> int:
        deleted, _ = Session.objects.filter(expires_at__lte=timezone.now()).delete()
        return deleted
