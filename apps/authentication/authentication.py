import logging

from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from apps.authentication.session_service import SessionService

logger = logging.getLogger(__name__)

SESSION_COOKIE = "sessionId"


class StaffSessionAuthentication(BaseAuthentication):
    """
    DRF authentication class resolving a POS session token to the acting staff member.

    The token is read from the ``Authorization: Session <token>`` header or, for the
    browser clients, from the ``sessionId`` cookie set at login.
    """

    keyword = "Session"

    def authenticate(self, request):
        token = self.get_token(request)
        if not token:
            return None

        session = SessionService.resolve(token)
        if session is None:
            raise AuthenticationFailed("Invalid or expired session.")

        if not session.user.is_active:
            raise AuthenticationFailed("User inactive or deleted.")

        return session.user, session

    def get_token(self, request):
        return self._token_from_header(request) or request.COOKIES.get(SESSION_COOKIE)

    def _token_from_header(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) == 1:
            raise AuthenticationFailed("Invalid Authorization header. No credentials provided.")
        if len(auth) > 2:
            raise AuthenticationFailed("Invalid Authorization header. Token string should not contain spaces.")
        return auth[1].decode("utf-8")

    def authenticate_header(self, request):
        return self.keyword
