from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.constants import MenuCategory
from apps.menus.models import MenuItem
from apps.menus.serializers import MenuSerializer


@extend_schema(
    summary="Staff: Available menu",
    description="Available items sorted by category then name, plus the same items grouped by category.",
    responses={200: MenuSerializer},
    tags=["menu"],
)
class MenuView(APIView):
    def get(self, request):
        items = list(MenuItem.objects.filter(available=True).order_by("category", "name"))

        data = {
            "categories": [{"id": value, "name": label} for value, label in MenuCategory.choices],
            "items": items,
            "grouped": {value: [item for item in items if item.category == value] for value in MenuCategory.values},
        }
        return Response(MenuSerializer(data).data)
