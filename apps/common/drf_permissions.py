from rest_framework import permissions

from .utils import has_role, is_authenticated, is_manager


class RoleBasedPermission(permissions.BasePermission):
    message = "Your role is not allowed to perform this action."

    def has_permission(self, request, view) -> bool:
        if not is_authenticated(request.user):
            return False

        allowed_roles = getattr(view, "allowed_roles", None)
        if not allowed_roles:
            return False

        if getattr(request.user, "is_superuser", False):
            return True

        return has_role(request.user, allowed_roles)


class IsManager(permissions.BasePermission):
    message = "Only administrators can perform this action."

    def has_permission(self, request, view) -> bool:
        return is_manager(request.user)

