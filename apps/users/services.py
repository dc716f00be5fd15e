import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework import status

from apps.common.constants import OrderStatus, TableStatus, UserRole
from apps.common.exceptions import ServiceError
from apps.orders.models import Order
from apps.tables.models import Table

logger = logging.getLogger(__name__)

User = get_user_model()


class StaffError(ServiceError):
    pass


def list_staff() -> dict:
    staff = User.objects.filter(is_active=True).order_by("name")
    return {
        "waiters": [user for user in staff if user.role == UserRole.WAITER],
        "chefs": [user for user in staff if user.role == UserRole.CHEF],
    }


def create_staff(actor, name: str, pin: str, role: str = UserRole.WAITER):
    if role == UserRole.SUPERADMIN and not (actor.is_superuser or actor.role == UserRole.SUPERADMIN):
        raise StaffError("Only a super administrator can create super administrators.", status.HTTP_403_FORBIDDEN)

    try:
        with transaction.atomic():
            user = User.objects.create_user(name=name, pin=pin, role=role)
    except IntegrityError as err:
        raise StaffError(f"A staff member named '{name}' already exists.") from err

    logger.info(f"Staff member {user.name} ({user.role}) created by {actor.name}")
    return user


@transaction.atomic
def delete_staff(actor, user_id) -> None:
    user = User.objects.select_for_update().filter(id=user_id).first()
    if user is None:
        raise StaffError("Staff member not found.", status.HTTP_404_NOT_FOUND)

    if user.pk == actor.pk:
        raise StaffError("You cannot delete your own account.")

    if user.role == UserRole.SUPERADMIN and actor.role != UserRole.SUPERADMIN and not actor.is_superuser:
        raise StaffError("Only a super administrator can delete super administrators.", status.HTTP_403_FORBIDDEN)

    open_order = Order.objects.filter(waiter=user, status__in=OrderStatus.active()).first()
    if open_order is not None:
        raise StaffError(
            f"{user.name} still holds open order {open_order.order_no} on table {open_order.table_number}.",
            status.HTTP_409_CONFLICT,
        )

    # An occupied table always has a holder; release what this user still locks
    stale = list(Table.objects.select_for_update().filter(current_waiter=user).values_list("number", flat=True))
    if stale:
        Table.objects.filter(current_waiter=user).update(
            status=TableStatus.AVAILABLE, current_waiter=None, updated_at=timezone.now()
        )
        logger.warning(f"Released stale lock(s) of {user.name} on table(s) {stale}")

    user.delete()
    logger.info(f"Staff member {user.name} deleted by {actor.name}")
