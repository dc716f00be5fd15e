"""
Shared helpers for role checks.
These functions keep permission classes, mixins and services consistent.
"""

from apps.common.constants import UserRole


def is_authenticated(user) -> bool:
    return getattr(user, "is_authenticated", False)


def has_role(user, roles) -> bool:
    if not is_authenticated(user):
        return False
    if isinstance(roles, str):
        roles = [roles]
    return getattr(user, "role", None) in roles


def is_manager(user) -> bool:
    if getattr(user, "is_superuser", False):
        return True
    return has_role(user, UserRole.managers())
