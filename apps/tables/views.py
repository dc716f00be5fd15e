from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.mixins import ManagerMixin
from apps.tables.models import Table
from apps.tables.serializers import TableCreateSerializer, TableSerializer, TableStatusSerializer
from apps.tables.services import create_table, delete_table, override_status


@extend_schema(summary="Staff: List tables", tags=["tables"])
class TableListView(generics.ListAPIView):
    serializer_class = TableSerializer
    pagination_class = None

    def get_queryset(self):
        return Table.objects.select_related("current_waiter").order_by("number")


@extend_schema(
    summary="Admin: Create a table",
    request=TableCreateSerializer,
    responses={201: TableSerializer},
    tags=["tables"],
)
class TableManageView(ManagerMixin, APIView):
    def post(self, request):
        serializer = TableCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        table = create_table(**serializer.validated_data)
        return Response(TableSerializer(table).data, status=status.HTTP_201_CREATED)


@extend_schema(summary="Admin: Delete a table", request=None, responses={204: None}, tags=["tables"])
class TableManageDetailView(ManagerMixin, APIView):
    def delete(self, request, id):
        delete_table(id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    summary="Admin: Override table status",
    description="Setting available or reserved clears the lock holder; occupied requires an open order.",
    request=TableStatusSerializer,
    responses={200: TableSerializer},
    tags=["tables"],
)
class TableStatusView(ManagerMixin, APIView):
    def put(self, request, id):
        serializer = TableStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        table = override_status(id, serializer.validated_data["status"])
        return Response(TableSerializer(table).data)
