"""
Order lifecycle: opening a table's tab, appending to it, moving it through the
kitchen / settlement statuses and keeping the table lock in step.

Every mutating operation runs in one transaction and locks the table row first
(then the order row), so concurrent requests against the same table are
serialised. The ``one_active_order_per_table`` constraint backs this up on
databases without row locks.
"""

import logging
import secrets
import string
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Max
from rest_framework import status

from apps.common.constants import SERVICE_CHARGE_RATE, TAX_RATE, OrderStatus, PaymentStatus, TableStatus
from apps.common.exceptions import ServiceError
from apps.orders.models import Order, OrderItem
from apps.tables.models import Table

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ORDER_NO_LENGTH = 8


class OrderError(ServiceError):
    pass


class OrderValidationError(OrderError):
    status_code = status.HTTP_400_BAD_REQUEST


class TableNotFoundError(OrderError):
    status_code = status.HTTP_404_NOT_FOUND


class OrderNotFoundError(OrderError):
    status_code = status.HTTP_404_NOT_FOUND


class TableOccupiedError(OrderError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str, holder_name: str | None = None):
        super().__init__(message)
        self.holder_name = holder_name


class InvalidTransitionError(OrderError):
    status_code = status.HTTP_409_CONFLICT


@dataclass(frozen=True)
class LineItem:
    menu_item_id: str
    name: str
    unit_price: Decimal
    quantity: int


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    tax: Decimal
    service_charge: Decimal
    total: Decimal

    def rounded(self) -> "Totals":
        """2dp figures for invoices and reports; the total is the sum of the rounded parts."""
        subtotal = quantize(self.subtotal)
        tax = quantize(self.tax)
        service_charge = quantize(self.service_charge)
        return Totals(subtotal=subtotal, tax=tax, service_charge=service_charge, total=subtotal + tax + service_charge)


@dataclass
class SubmitResult:
    order: Order
    created: bool


def quantize(amount) -> Decimal:
    return Decimal(amount or 0).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def compute_totals(items) -> Totals:
    """
    Totals over anything exposing ``unit_price`` and ``quantity`` (LineItem or OrderItem).
    Full precision is kept; rounding happens at the reporting boundary.
    """
    subtotal = sum((Decimal(item.unit_price) * item.quantity for item in items), Decimal("0"))
    tax = subtotal * TAX_RATE
    service_charge = subtotal * SERVICE_CHARGE_RATE
    return Totals(subtotal=subtotal, tax=tax, service_charge=service_charge, total=subtotal + tax + service_charge)


def _validate_line_item(item: LineItem, position: int) -> None:
    if not item.menu_item_id:
        raise OrderValidationError(f"Item {position}: menu_item_id is required.")
    if not item.name:
        raise OrderValidationError(f"Item {position}: name is required.")
    if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity < 1:
        raise OrderValidationError(f"Item {position}: quantity must be a whole number of at least 1.")
    if not item.unit_price.is_finite() or item.unit_price < 0:
        raise OrderValidationError(f"Item {position}: unit_price must be zero or more.")
    if item.unit_price != item.unit_price.quantize(TWOPLACES):
        raise OrderValidationError(f"Item {position}: unit_price cannot have more than 2 decimal places.")


def normalize_line_items(items) -> list[LineItem]:
    if not items:
        raise OrderValidationError("An order needs at least one item.")

    line_items = []
    for position, raw in enumerate(items, start=1):
        if isinstance(raw, LineItem):
            item = raw
        else:
            try:
                item = LineItem(
                    menu_item_id=str(raw.get("menu_item_id") or "").strip(),
                    name=str(raw.get("name") or "").strip(),
                    unit_price=Decimal(str(raw.get("unit_price"))),
                    quantity=raw.get("quantity"),
                )
            except (AttributeError, InvalidOperation, TypeError) as err:
                raise OrderValidationError(f"Item {position} is malformed.") from err

        _validate_line_item(item, position)
        line_items.append(item)

    return line_items


def _generate_order_no():
    chars = string.ascii_uppercase + string.digits
    while True:
        code = "".join(secrets.choice(chars) for _ in range(ORDER_NO_LENGTH))
        if not Order.objects.filter(order_no=code).exists():
            return code


def _get_locked_table(table_number) -> Table:
    try:
        return Table.objects.select_for_update().get(number=table_number)
    except Table.DoesNotExist as err:
        raise TableNotFoundError(f"Table {table_number} does not exist.") from err


def _apply_totals(order: Order, totals: Totals) -> None:
    order.subtotal = totals.subtotal
    order.tax = totals.tax
    order.service_charge = totals.service_charge
    order.total = totals.total


def _create_items(order: Order, line_items: list[LineItem], first_line_no: int, submission_key: str) -> None:
    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                line_no=first_line_no + offset,
                menu_item_id=item.menu_item_id,
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                submission_key=submission_key or "",
            )
            for offset, item in enumerate(line_items)
        ]
    )


def _lock_table(table: Table, user) -> None:
    if table.status == TableStatus.OCCUPIED and table.current_waiter_id == user.id:
        return

    if table.current_waiter_id not in (None, user.id):
        logger.warning(f"Table {table.number} had a stale lock without an open order; reassigning to {user.name}")

    table.status = TableStatus.OCCUPIED
    table.current_waiter = user
    table.save(update_fields=["status", "current_waiter", "updated_at"])


def _open_order(table: Table, user, line_items, customer_name, customer_email, submission_key) -> Order:
    order = Order(
        order_no=_generate_order_no(),
        table_number=table.number,
        waiter=user,
        waiter_name=user.name,
        customer_name=customer_name or "Guest",
        customer_email=customer_email or "",
        status=OrderStatus.PENDING,
        payment_status=PaymentStatus.UNPAID,
    )
    _apply_totals(order, compute_totals(line_items))

    try:
        with transaction.atomic():
            order.save(force_insert=True)
    except IntegrityError as err:
        logger.warning(f"Concurrent order creation on table {table.number} rejected for {user.name}")
        raise TableOccupiedError(f"Table {table.number} already has an open order.") from err

    _create_items(order, line_items, first_line_no=1, submission_key=submission_key)
    _lock_table(table, user)

    logger.info(f"Order {order.order_no} opened on table {table.number} by {user.name} ({len(line_items)} item(s))")
    return order


def _append_items(order: Order, line_items, submission_key) -> None:
    last_line_no = order.items.aggregate(last=Max("line_no"))["last"] or 0
    _create_items(order, line_items, first_line_no=last_line_no + 1, submission_key=submission_key)

    _apply_totals(order, compute_totals(order.items.all()))
    order.save(update_fields=["subtotal", "tax", "service_charge", "total", "updated_at"])

    logger.info(f"Order {order.order_no}: appended {len(line_items)} item(s), total now {order.total}")


@transaction.atomic
def submit_order(
    table_number,
    user,
    items,
    customer_name: str | None = None,
    customer_email: str | None = None,
    submission_key: str = "",
) -> SubmitResult:
    """
    Open a tab on the table or append to the acting waiter's open tab.
    - no active order: create one (pending, unpaid) and lock the table to the waiter
    - active order of another waiter: TableOccupiedError, nothing is written
    - active order of this waiter: append lines and recompute totals
    A repeated ``submission_key`` on the open tab is a no-op.
    """
    line_items = normalize_line_items(items)
    table = _get_locked_table(table_number)

    order = (
        Order.objects.select_for_update()
        .filter(table_number=table.number, status__in=OrderStatus.active())
        .first()
    )

    if order is None:
        order = _open_order(table, user, line_items, customer_name, customer_email, submission_key)
        return SubmitResult(order=order, created=True)

    if order.waiter_id != user.id:
        logger.info(f"Table {table.number}: submission by {user.name} rejected, tab held by {order.waiter_name}")
        raise TableOccupiedError(f"Table occupied by {order.waiter_name}", holder_name=order.waiter_name)

    if submission_key and order.items.filter(submission_key=submission_key).exists():
        logger.info(f"Order {order.order_no}: submission {submission_key} already applied, skipping")
        return SubmitResult(order=order, created=False)

    _append_items(order, line_items, submission_key)
    _lock_table(table, user)
    return SubmitResult(order=order, created=False)


def can_transition(current: str, new: str) -> bool:
    if current in OrderStatus.terminal():
        return False
    if new == OrderStatus.CANCELLED:
        return True

    flow = OrderStatus.flow()
    return flow.index(new) > flow.index(current)


def _release_table(table: Table, order: Order) -> bool:
    """Unlock the table only if it is still held for this order."""
    if table.current_waiter_id is not None and table.current_waiter_id != order.waiter_id:
        logger.warning(f"Table {table.number} left locked: held by another waiter than order {order.order_no}")
        return False

    other_active = (
        Order.objects.filter(table_number=table.number, status__in=OrderStatus.active()).exclude(pk=order.pk).exists()
    )
    if other_active:
        logger.warning(f"Table {table.number} left locked: another order is open on it")
        return False

    table.status = TableStatus.AVAILABLE
    table.current_waiter = None
    table.save(update_fields=["status", "current_waiter", "updated_at"])

    logger.info(f"Table {table.number} released after order {order.order_no} was {order.status}")
    return True


@transaction.atomic
def advance_status(order_ref, new_status: str) -> Order:
    """
    Move an order along pending -> preparing -> served -> paid (steps may be skipped),
    or cancel it while active. Settling or cancelling releases the table lock.
    """
    if new_status not in OrderStatus.values:
        raise OrderValidationError(f"Unknown order status '{new_status}'.")

    order = get_order(order_ref)
    table = Table.objects.select_for_update().filter(number=order.table_number).first()
    order = Order.objects.select_for_update().get(pk=order.pk)

    if order.status == new_status:
        return order

    if not can_transition(order.status, new_status):
        raise InvalidTransitionError(f"Cannot move order {order.order_no} from {order.status} to {new_status}.")

    previous = order.status
    order.status = new_status
    update_fields = ["status", "updated_at"]
    if new_status == OrderStatus.PAID:
        order.payment_status = PaymentStatus.PAID
        update_fields.append("payment_status")
    order.save(update_fields=update_fields)

    logger.info(f"Order {order.order_no}: {previous} -> {new_status}")

    if new_status in OrderStatus.terminal() and table is not None:
        _release_table(table, order)

    return order


def get_order(order_ref) -> Order:
    """Find an order by its UUID primary key or by its order_no code."""
    try:
        lookup = {"pk": UUID(str(order_ref))}
    except ValueError:
        lookup = {"order_no": str(order_ref).strip().upper()}

    try:
        return Order.objects.get(**lookup)
    except Order.DoesNotExist as err:
        raise OrderNotFoundError("Order not found.") from err


def get_active_order(table_number) -> Order | None:
    return Order.objects.filter(table_number=table_number, status__in=OrderStatus.active()).first()
