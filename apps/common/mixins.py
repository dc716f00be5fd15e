from rest_framework.response import Response

from .drf_permissions import IsManager, RoleBasedPermission
from .exceptions import ServiceError


class ServiceErrorMixin:
    """Render ServiceError subclasses raised inside a view as JSON error responses."""

    def handle_exception(self, exc):
        if isinstance(exc, ServiceError):
            return Response({"detail": exc.message}, status=exc.status_code)
        return super().handle_exception(exc)


class PermissionMixin(ServiceErrorMixin):
    permission_classes = [RoleBasedPermission]


class ManagerMixin(ServiceErrorMixin):
    permission_classes = [IsManager]

