from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.mixins import ManagerMixin
from apps.orders.models import Order
from apps.reports.serializers import SummaryQuerySerializer, SummarySerializer
from apps.reports.services import summarize, window_for


@extend_schema(
    summary="Admin: Revenue summary",
    description="Paid revenue, per-waiter and per-table breakdowns and status counts for a day, a month or all time.",
    parameters=[
        OpenApiParameter(name="scope", type=str, enum=["day", "month", "all"], default="day"),
        OpenApiParameter(name="as_of", type=str, description="ISO datetime inside the reported period"),
    ],
    responses={200: SummarySerializer},
    tags=["reports"],
)
class SummaryView(ManagerMixin, APIView):
    def get(self, request):
        query = SummaryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        scope = query.validated_data["scope"]
        as_of = query.validated_data.get("as_of") or timezone.now()

        orders = Order.objects.only("status", "created_at", "total", "waiter_name", "table_number").order_by(
            "created_at"
        )
        window = window_for(scope, as_of)
        if window is not None:
            orders = orders.filter(created_at__gte=window[0], created_at__lt=window[1])

        summary = summarize(orders, scope=scope, as_of=as_of)
        return Response(SummarySerializer(summary).data)
