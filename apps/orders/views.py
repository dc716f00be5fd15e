from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import SAFE_METHODS, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.constants import ORDER_SUBMIT_ROLES, STATUS_CHANGE_ROLES
from apps.common.mixins import PermissionMixin, ServiceErrorMixin
from apps.common.utils import has_role
from apps.orders.filters import OrderFilter
from apps.orders.models import Order
from apps.orders.serializers import (
    OrderSerializer,
    OrderStatusSerializer,
    OrderSubmitResponseSerializer,
    OrderSubmitSerializer,
)
from apps.orders.services import OrderNotFoundError, advance_status, get_active_order, get_order, submit_order

ORDER_REF_PARAMETER = OpenApiParameter(
    name="order_ref",
    description="Order UUID or 8 character order number",
    required=True,
    type=str,
    location=OpenApiParameter.PATH,
)


@extend_schema_view(
    get=extend_schema(
        summary="Staff: List orders",
        description="Newest first. Filter by status, table_number, waiter and payment_status.",
        tags=["orders"],
    ),
)
class OrderListCreateView(PermissionMixin, generics.ListAPIView):
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    allowed_roles = ORDER_SUBMIT_ROLES

    def get_queryset(self):
        return Order.objects.prefetch_related("items").order_by("-created_at")

    def get_permissions(self):
        # Any staff member may read orders; submitting is gated by role
        if self.request.method in SAFE_METHODS:
            return [IsAuthenticated()]
        return super().get_permissions()

    @extend_schema(
        summary="Waiter: Submit items for a table",
        description=(
            "Opens a new order on the table, or appends the items to the open order when the acting "
            "waiter holds it. A table held by another waiter is rejected with 403."
        ),
        request=OrderSubmitSerializer,
        responses={201: OrderSubmitResponseSerializer, 200: OrderSubmitResponseSerializer},
        tags=["orders"],
    )
    def post(self, request):
        serializer = OrderSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = submit_order(
            table_number=data["table_number"],
            user=request.user,
            items=data["items"],
            customer_name=data.get("customer_name"),
            customer_email=data.get("customer_email"),
            submission_key=data.get("submission_key", ""),
        )

        payload = OrderSubmitResponseSerializer(
            {"order_id": result.order.id, "order_no": result.order.order_no, "created": result.created}
        ).data
        return Response(payload, status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK)


class OrderDetailView(ServiceErrorMixin, APIView):
    @extend_schema(
        summary="Staff: Get order by id or order number",
        parameters=[ORDER_REF_PARAMETER],
        responses={200: OrderSerializer},
        tags=["orders"],
    )
    def get(self, request, order_ref):
        order = get_order(order_ref)
        return Response(OrderSerializer(order).data)

    @extend_schema(
        summary="Kitchen / Admin: Change order status",
        description=(
            "Chefs may set preparing and served; administrators may set any status. "
            "Paid and cancelled are final and release the table."
        ),
        parameters=[ORDER_REF_PARAMETER],
        request=OrderStatusSerializer,
        responses={200: OrderSerializer},
        tags=["orders"],
    )
    def patch(self, request, order_ref):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data["status"]

        if not request.user.is_superuser and not has_role(request.user, STATUS_CHANGE_ROLES[new_status]):
            raise PermissionDenied(f"Role '{request.user.role}' cannot set orders to '{new_status}'.")

        order = advance_status(order_ref, new_status)
        order = Order.objects.prefetch_related("items").get(pk=order.pk)
        return Response(OrderSerializer(order).data)


@extend_schema(
    summary="Staff: Get the open order of a table",
    responses={200: OrderSerializer},
    tags=["orders"],
)
class TableActiveOrderView(ServiceErrorMixin, APIView):
    def get(self, request, table_number):
        order = get_active_order(table_number)
        if order is None:
            raise OrderNotFoundError(f"Table {table_number} has no open order.")
        return Response(OrderSerializer(order).data)
