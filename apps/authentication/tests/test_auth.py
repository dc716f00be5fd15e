from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.urls import reverse
from django.utils import timezone

import pytest

from apps.authentication.authentication import SESSION_COOKIE
from apps.authentication.models import Session
from apps.authentication.session_service import SessionService
from apps.users.tests.factories import DEFAULT_PIN

pytestmark = pytest.mark.django_db


def login(client, name, pin=DEFAULT_PIN):
    return client.post(reverse("authentication:login"), {"name": name, "pin": pin}, format="json")


class TestLogin:
    def test_login_issues_session_and_cookie(self, api_client, waiter):
        response = login(api_client, "Asha")

        assert response.status_code == 200
        assert response.data["user"]["name"] == "Asha"
        assert response.data["user"]["role"] == "waiter"
        token = response.data["token"]
        assert response.cookies[SESSION_COOKIE].value == token
        assert response.cookies[SESSION_COOKIE]["httponly"]

        session = Session.objects.get(token=token)
        assert session.user == waiter
        assert session.user_name == "Asha"
        assert session.user_role == "waiter"

    def test_wrong_pin(self, api_client, waiter):
        response = login(api_client, "Asha", "9999")

        assert response.status_code == 401
        assert response.data["detail"] == "Invalid PIN"
        assert not Session.objects.exists()

    def test_unknown_user(self, api_client):
        response = login(api_client, "Nobody")

        assert response.status_code == 401
        assert response.data["detail"] == "User not found"

    def test_inactive_user_cannot_log_in(self, api_client, waiter):
        waiter.is_active = False
        waiter.save()

        assert login(api_client, "Asha").status_code == 401


class TestSessionAuthentication:
    def test_me_with_header(self, client_for, chef):
        response = client_for(chef).get(reverse("authentication:me"))

        assert response.status_code == 200
        assert response.data == {"userId": str(chef.id), "name": "Chef Meera", "role": "chef"}

    def test_me_with_cookie(self, api_client, waiter):
        login(api_client, "Asha")

        response = api_client.get(reverse("authentication:me"))

        assert response.status_code == 200
        assert response.data["name"] == "Asha"

    def test_missing_session(self, api_client):
        assert api_client.get(reverse("authentication:me")).status_code == 401

    def test_unknown_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Session not-a-token")
        assert api_client.get(reverse("authentication:me")).status_code == 401

    def test_expired_session_is_rejected_and_removed(self, api_client, waiter):
        session = SessionService.create_session(waiter)
        Session.objects.filter(pk=session.pk).update(expires_at=timezone.now() - timedelta(minutes=1))
        api_client.credentials(HTTP_AUTHORIZATION=f"Session {session.token}")

        assert api_client.get(reverse("authentication:me")).status_code == 401
        assert not Session.objects.filter(pk=session.pk).exists()

    def test_deleted_user_loses_session(self, client_for, waiter):
        client = client_for(waiter)
        waiter.delete()

        assert client.get(reverse("authentication:me")).status_code == 401


class TestLogout:
    def test_logout_revokes_session(self, client_for, waiter):
        client = client_for(waiter)

        response = client.post(reverse("authentication:logout"))

        assert response.status_code == 204
        assert not Session.objects.exists()
        assert client.get(reverse("authentication:me")).status_code == 401

    def test_logout_is_idempotent(self, api_client, waiter):
        login(api_client, "Asha")

        assert api_client.post(reverse("authentication:logout")).status_code == 204
        assert api_client.post(reverse("authentication:logout")).status_code == 204

    def test_logout_with_expired_session(self, api_client, waiter):
        session = SessionService.create_session(waiter)
        Session.objects.filter(pk=session.pk).update(expires_at=timezone.now() - timedelta(minutes=1))
        api_client.credentials(HTTP_AUTHORIZATION=f"Session {session.token}")

        assert api_client.post(reverse("authentication:logout")).status_code == 204
        assert not Session.objects.exists()


class TestSessionManagement:
    def test_list_marks_current_session(self, client_for, waiter):
        SessionService.create_session(waiter)
        client = client_for(waiter)

        response = client.get(reverse("authentication:session_list"))

        assert response.status_code == 200
        assert len(response.data) == 2
        assert sorted(row["current"] for row in response.data) == [False, True]

    def test_revoke_all_other_sessions(self, client_for, waiter, other_waiter):
        SessionService.create_session(waiter)
        SessionService.create_session(waiter)
        SessionService.create_session(other_waiter)
        client = client_for(waiter)

        response = client.post(reverse("authentication:session_revoke_all"))

        assert response.status_code == 200
        assert response.data == {"revoked": 2}
        assert Session.objects.filter(user=waiter).count() == 1
        assert Session.objects.filter(user=other_waiter).count() == 1

    def test_revoke_only_own_sessions(self, client_for, waiter, other_waiter):
        foreign = SessionService.create_session(other_waiter)
        mine = SessionService.create_session(waiter)
        client = client_for(waiter)

        forbidden = client.delete(reverse("authentication:session_revoke", kwargs={"token": foreign.token}))
        allowed = client.delete(reverse("authentication:session_revoke", kwargs={"token": mine.token}))

        assert forbidden.status_code == 404
        assert allowed.status_code == 204
        assert Session.objects.filter(pk=foreign.pk).exists()
        assert not Session.objects.filter(pk=mine.pk).exists()


def test_purge_sessions_command(waiter):
    live = SessionService.create_session(waiter)
    stale = SessionService.create_session(waiter)
    Session.objects.filter(pk=stale.pk).update(expires_at=timezone.now() - timedelta(hours=1))
    out = StringIO()

    call_command("purge_sessions", stdout=out)

    assert "Purged 1 expired session(s)" in out.getvalue()
    assert list(Session.objects.values_list("pk", flat=True)) == [live.pk]
