from django.urls import path

from .views import (
    LoginView,
    LogoutView,
    MeView,
    SessionListView,
    SessionRevokeAllView,
    SessionRevokeView,
)

app_name = "authentication"

urlpatterns = [
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    # Sessions
    path("sessions/", SessionListView.as_view(), name="session_list"),
    path("sessions/revoke-all/", SessionRevokeAllView.as_view(), name="session_revoke_all"),
    path("sessions/<str:token>/", SessionRevokeView.as_view(), name="session_revoke"),
]
