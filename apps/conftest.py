"""
Shared pytest fixtures for the API tests.
"""

from django.core.cache import cache

import pytest
from rest_framework.test import APIClient

from apps.authentication.session_service import SessionService
from apps.common.constants import UserRole
from apps.tables.tests.factories import TableFactory
from apps.users.tests.factories import UserFactory


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; keep them from leaking between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def client_for():
    """Build an APIClient authenticated as the given staff member through a real session."""

    def _client_for(user) -> APIClient:
        client = APIClient()
        session = SessionService.create_session(user)
        client.credentials(HTTP_AUTHORIZATION=f"Session {session.token}")
        return client

    return _client_for


@pytest.fixture
def waiter(db):
    return UserFactory(name="Asha", role=UserRole.WAITER)


@pytest.fixture
def other_waiter(db):
    return UserFactory(name="Ravi", role=UserRole.WAITER)


@pytest.fixture
def chef(db):
    return UserFactory(name="Chef Meera", role=UserRole.CHEF)


@pytest.fixture
def admin_user(db):
    return UserFactory(name="Manager", role=UserRole.ADMIN)


@pytest.fixture
def table(db):
    return TableFactory(number=5, name="Window")
