from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authentication.authentication import SESSION_COOKIE, StaffSessionAuthentication
from apps.authentication.serializers import (
    LoginResponseSerializer,
    LoginSerializer,
    MeSerializer,
    SessionSerializer,
)
from apps.authentication.services import authenticate_pin
from apps.authentication.session_service import SessionService
from apps.common.mixins import ServiceErrorMixin


def cookie_opts(request=None):
    return {
        "path": "/",
        "samesite": "Lax",
        "secure": (request.is_secure() if request else not settings.DEBUG),
        "httponly": True,
    }


def delete_cookie_opts():
    """Options for deleting cookies - more limited than set_cookie"""
    return {
        "path": "/",
        "samesite": "Lax",
    }


def _current_token(request):
    session = getattr(request, "auth", None)
    return getattr(session, "token", None)


@extend_schema(
    summary="Staff: Log in with name and PIN",
    request=LoginSerializer,
    responses={200: LoginResponseSerializer},
    tags=["auth"],
)
class LoginView(ServiceErrorMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_scope = "login"

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate_pin(serializer.validated_data["name"], serializer.validated_data["pin"])
        session = SessionService.create_session(user, request)

        data = LoginResponseSerializer({"user": user, "token": session.token, "expires_at": session.expires_at}).data
        response = Response(data, status=status.HTTP_200_OK)
        response.set_cookie(
            SESSION_COOKIE,
            session.token,
            max_age=int((session.expires_at - session.created_at).total_seconds()),
            **cookie_opts(request),
        )
        return response


@extend_schema(summary="Staff: Log out the current session", request=None, responses={204: None}, tags=["auth"])
class LogoutView(APIView):
    permission_classes = [AllowAny]
    # An expired token must still be able to log out
    authentication_classes = []

    def post(self, request):
        token = StaffSessionAuthentication().get_token(request)
        if token:
            SessionService.revoke_session(token)  # logout is idempotent

        resp = Response(status=status.HTTP_204_NO_CONTENT)
        resp.delete_cookie(SESSION_COOKIE, **delete_cookie_opts())
        return resp


@extend_schema(summary="Staff: Current session identity", responses={200: MeSerializer}, tags=["auth"])
class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(MeSerializer(request.user).data)


@extend_schema(summary="Staff: List my live sessions", tags=["auth"])
class SessionListView(ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = SessionSerializer
    pagination_class = None

    def get_queryset(self):
        return SessionService.list_sessions(self.request.user)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["current_token"] = _current_token(self.request)
        return context


@extend_schema(summary="Staff: Revoke all my other sessions", request=None, tags=["auth"])
class SessionRevokeAllView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        revoked = SessionService.revoke_all_other_sessions(request.user, _current_token(request))
        return Response({"revoked": revoked}, status=status.HTTP_200_OK)


@extend_schema(summary="Staff: Revoke one of my sessions", request=None, responses={204: None}, tags=["auth"])
class SessionRevokeView(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, token):
        owned = request.user.pos_sessions.filter(token=token).exists()
        if not owned:
            return Response({"detail": "Session not found."}, status=status.HTTP_404_NOT_FOUND)

        SessionService.revoke_session(token)
        return Response(status=status.HTTP_204_NO_CONTENT)
