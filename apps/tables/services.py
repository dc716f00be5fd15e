import logging

from django.db import IntegrityError, transaction
from rest_framework import status

from apps.common.constants import OrderStatus, TableStatus
from apps.common.exceptions import ServiceError
from apps.orders.models import Order
from apps.tables.models import Table

logger = logging.getLogger(__name__)


class TableError(ServiceError):
    pass


def _get_locked_table(table_id) -> Table:
    try:
        return Table.objects.select_for_update().get(id=table_id)
    except Table.DoesNotExist as err:
        raise TableError("Table not found.", status.HTTP_404_NOT_FOUND) from err


def _active_order_for(table_number):
    return Order.objects.filter(table_number=table_number, status__in=OrderStatus.active()).first()


def create_table(name: str, number: int, seating_capacity: int = 4) -> Table:
    try:
        with transaction.atomic():
            table = Table.objects.create(name=name, number=number, seating_capacity=seating_capacity)
    except IntegrityError as err:
        raise TableError(f"Table number {number} already exists.") from err

    logger.info(f"Table {number} created")
    return table


@transaction.atomic
def delete_table(table_id) -> None:
    table = _get_locked_table(table_id)

    active = _active_order_for(table.number)
    if active is not None:
        raise TableError(
            f"Table {table.number} has an open order ({active.order_no}).",
            status.HTTP_409_CONFLICT,
        )

    table.delete()
    logger.info(f"Table {table.number} deleted")


@transaction.atomic
def override_status(table_id, new_status: str) -> Table:
    """
    Explicit admin override of a table's occupancy.
    - available: clears the lock holder
    - occupied: only with an open order, whose waiter becomes the holder
    - reserved: no holder
    """
    if new_status not in TableStatus.values:
        raise TableError(f"Unknown table status '{new_status}'.")

    table = _get_locked_table(table_id)

    if new_status == TableStatus.OCCUPIED:
        active = _active_order_for(table.number)
        if active is None:
            raise TableError("A table can only be marked occupied while it has an open order.")
        table.current_waiter_id = active.waiter_id
    else:
        table.current_waiter = None

    previous = table.status
    table.status = new_status
    table.save(update_fields=["status", "current_waiter", "updated_at"])

    logger.warning(f"Table {table.number} status overridden: {previous} -> {new_status}")
    return table
