import logging

from django.contrib.auth import get_user_model
from rest_framework import status

from apps.common.exceptions import ServiceError

logger = logging.getLogger(__name__)

User = get_user_model()


class AuthError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


def authenticate_pin(name: str, pin: str):
    """Look up a staff member by display name and verify the PIN hash."""
    user = User.objects.filter(name=name, is_active=True).first()
    if user is None:
        logger.info(f"Login rejected: unknown user {name!r}")
        raise AuthError("User not found")

    if not user.check_pin(pin):
        logger.info(f"Login rejected: invalid PIN for {name!r}")
        raise AuthError("Invalid PIN")

    return user
