from decimal import Decimal

from django.urls import reverse

import pytest

from apps.common.constants import MenuCategory
from apps.menus.tests.factories import MenuItemFactory

pytestmark = pytest.mark.django_db


def test_menu_lists_available_items_sorted_and_grouped(client_for, waiter):
    MenuItemFactory(name="Gulab Jamun", category=MenuCategory.DESSERTS, price=Decimal("90.00"))
    MenuItemFactory(name="Butter Naan", category=MenuCategory.MAIN_COURSE)
    MenuItemFactory(name="Aloo Gobi", category=MenuCategory.MAIN_COURSE)
    MenuItemFactory(name="Hidden Special", category=MenuCategory.STARTERS, available=False)

    response = client_for(waiter).get(reverse("menus:menu"))

    assert response.status_code == 200
    assert [item["name"] for item in response.data["items"]] == ["Gulab Jamun", "Aloo Gobi", "Butter Naan"]
    assert [c["id"] for c in response.data["categories"]] == list(MenuCategory.values)

    grouped = response.data["grouped"]
    assert [item["name"] for item in grouped["main_course"]] == ["Aloo Gobi", "Butter Naan"]
    assert grouped["starters"] == []
    assert grouped["desserts"][0]["price"] == "90.00"


def test_menu_requires_authentication(api_client):
    assert api_client.get(reverse("menus:menu")).status_code == 401
