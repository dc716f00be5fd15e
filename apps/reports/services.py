"""
Revenue and activity summaries over orders.

``summarize`` is a pure fold: it never touches the database, so callers may pass
a queryset, a list of model instances or any objects exposing ``status``,
``created_at``, ``total``, ``waiter_name`` and ``table_number``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone

from apps.common.constants import OrderStatus
from apps.common.exceptions import ServiceError
from apps.orders.services import quantize

SCOPES = ("day", "month", "all")


class ReportError(ServiceError):
    pass


@dataclass
class WaiterRevenue:
    waiter_name: str
    revenue: Decimal
    orders: int


@dataclass
class TableRevenue:
    table_number: int
    revenue: Decimal
    orders: int


@dataclass
class Summary:
    scope: str
    window_start: datetime | None
    window_end: datetime | None
    total_revenue: Decimal
    paid_orders: int
    average_order_value: Decimal
    order_count: int
    completion_rate: int
    status_counts: dict[str, int] = field(default_factory=dict)
    waiter_revenue: list[WaiterRevenue] = field(default_factory=list)
    table_revenue: list[TableRevenue] = field(default_factory=list)


def window_for(scope: str, as_of: datetime) -> tuple[datetime, datetime] | None:
    """Half-open [start, end) bounds of the local calendar day or month containing ``as_of``."""
    if scope not in SCOPES:
        raise ReportError(f"Unknown scope '{scope}'. Use one of: {', '.join(SCOPES)}.")
    if scope == "all":
        return None

    if timezone.is_naive(as_of):
        as_of = timezone.make_aware(as_of)
    local = timezone.localtime(as_of)

    if scope == "day":
        start = local.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        return start, end

    start = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def _ranked(totals: dict, counts: dict) -> list[tuple]:
    # sorted() is stable, so equal revenues keep first-seen order
    return sorted(((key, revenue, counts[key]) for key, revenue in totals.items()), key=lambda row: -row[1])


def summarize(orders, scope: str = "day", as_of: datetime | None = None) -> Summary:
    window = window_for(scope, as_of or timezone.now())

    status_counts = {value: 0 for value in OrderStatus.values}
    waiter_totals: dict[str, Decimal] = {}
    waiter_counts: dict[str, int] = {}
    table_totals: dict[int, Decimal] = {}
    table_counts: dict[int, int] = {}
    revenue = Decimal("0")
    order_count = 0
    paid_count = 0

    for order in orders:
        if window is not None and not (window[0] <= order.created_at < window[1]):
            continue

        order_count += 1
        status_counts[order.status] = status_counts.get(order.status, 0) + 1
        if order.status != OrderStatus.PAID:
            continue

        amount = Decimal(order.total or 0)
        paid_count += 1
        revenue += amount

        waiter_totals[order.waiter_name] = waiter_totals.get(order.waiter_name, Decimal("0")) + amount
        waiter_counts[order.waiter_name] = waiter_counts.get(order.waiter_name, 0) + 1
        table_totals[order.table_number] = table_totals.get(order.table_number, Decimal("0")) + amount
        table_counts[order.table_number] = table_counts.get(order.table_number, 0) + 1

    average = revenue / paid_count if paid_count else Decimal("0")
    completion_rate = 0
    if order_count:
        completion_rate = int((Decimal(paid_count) * 100 / order_count).quantize(Decimal("1"), ROUND_HALF_UP))

    return Summary(
        scope=scope,
        window_start=window[0] if window else None,
        window_end=window[1] if window else None,
        total_revenue=quantize(revenue),
        paid_orders=paid_count,
        average_order_value=quantize(average),
        order_count=order_count,
        completion_rate=completion_rate,
        status_counts=status_counts,
        waiter_revenue=[
            WaiterRevenue(waiter_name=name, revenue=quantize(total), orders=count)
            for name, total, count in _ranked(waiter_totals, waiter_counts)
        ],
        table_revenue=[
            TableRevenue(table_number=number, revenue=quantize(total), orders=count)
            for number, total, count in _ranked(table_totals, table_counts)
        ],
    )
