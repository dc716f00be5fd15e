from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.mixins import ManagerMixin
from apps.users.serializers import StaffCreateSerializer, StaffListSerializer, StaffSerializer
from apps.users.services import create_staff, delete_staff, list_staff


@extend_schema_view(
    get=extend_schema(summary="Admin: List waiters and chefs", responses={200: StaffListSerializer}, tags=["users"]),
    post=extend_schema(
        summary="Admin: Create a staff member",
        request=StaffCreateSerializer,
        responses={201: StaffSerializer},
        tags=["users"],
    ),
)
class StaffView(ManagerMixin, APIView):
    def get(self, request):
        return Response(StaffListSerializer(list_staff()).data)

    def post(self, request):
        serializer = StaffCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = create_staff(request.user, **serializer.validated_data)
        return Response(StaffSerializer(user).data, status=status.HTTP_201_CREATED)


@extend_schema(summary="Admin: Delete a staff member", request=None, responses={204: None}, tags=["users"])
class StaffDetailView(ManagerMixin, APIView):
    def delete(self, request, id):
        delete_staff(request.user, id)
        return Response(status=status.HTTP_204_NO_CONTENT)
