import django_filters

from apps.common.constants import OrderStatus, PaymentStatus
from apps.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.MultipleChoiceFilter(choices=OrderStatus.choices)
    table_number = django_filters.NumberFilter()
    waiter = django_filters.UUIDFilter(field_name="waiter_id")
    payment_status = django_filters.ChoiceFilter(choices=PaymentStatus.choices)

    class Meta:
        model = Order
        fields = ["status", "table_number", "waiter", "payment_status"]
