from decimal import Decimal

from django.urls import reverse

import pytest

from apps.common.constants import OrderStatus, TableStatus, UserRole
from apps.orders.models import Order
from apps.orders.services import submit_order
from apps.orders.tests.factories import OrderFactory
from apps.tables.tests.factories import TableFactory
from apps.users.tests.factories import UserFactory

pytestmark = pytest.mark.django_db

ITEMS = [
    {"menu_item_id": "m-paneer", "name": "Paneer Tikka", "unit_price": "350.00", "quantity": 1},
    {"menu_item_id": "m-lassi", "name": "Sweet Lassi", "unit_price": "50.00", "quantity": 2},
]


def order_list_url():
    return reverse("orders:order-list")


def order_detail_url(order_ref):
    return reverse("orders:order-detail", kwargs={"order_ref": order_ref})


class TestSubmitOrder:
    def test_first_submission_returns_201(self, client_for, waiter, table):
        response = client_for(waiter).post(
            order_list_url(), {"table_number": table.number, "items": ITEMS, "customer_name": "Nikhil"}, format="json"
        )

        assert response.status_code == 201
        assert response.data["created"] is True
        order = Order.objects.get(id=response.data["order_id"])
        assert order.order_no == response.data["order_no"]
        assert order.total == Decimal("517.5")

    def test_append_returns_200(self, client_for, waiter, table):
        client = client_for(waiter)
        first = client.post(order_list_url(), {"table_number": table.number, "items": ITEMS[:1]}, format="json")
        second = client.post(order_list_url(), {"table_number": table.number, "items": ITEMS[1:]}, format="json")

        assert second.status_code == 200
        assert second.data["created"] is False
        assert second.data["order_id"] == first.data["order_id"]

    def test_table_held_by_other_waiter(self, client_for, waiter, other_waiter, table):
        submit_order(table.number, waiter, ITEMS)

        response = client_for(other_waiter).post(
            order_list_url(), {"table_number": table.number, "items": ITEMS}, format="json"
        )

        assert response.status_code == 403
        assert response.data["detail"] == "Table occupied by Asha"

    def test_chef_cannot_submit(self, client_for, chef, table):
        response = client_for(chef).post(order_list_url(), {"table_number": table.number, "items": ITEMS}, format="json")

        assert response.status_code == 403
        assert not Order.objects.exists()

    def test_admin_can_submit(self, client_for, admin_user, table):
        response = client_for(admin_user).post(
            order_list_url(), {"table_number": table.number, "items": ITEMS}, format="json"
        )
        assert response.status_code == 201

    def test_requires_authentication(self, api_client, table):
        response = api_client.post(order_list_url(), {"table_number": table.number, "items": ITEMS}, format="json")
        assert response.status_code == 401

    def test_unknown_table(self, client_for, waiter):
        response = client_for(waiter).post(order_list_url(), {"table_number": 404, "items": ITEMS}, format="json")
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [
            {"table_number": 5, "items": []},
            {"table_number": 5},
            {"table_number": 0, "items": ITEMS},
            {"table_number": 5, "items": [{**ITEMS[0], "quantity": 0}]},
            {"table_number": 5, "items": [{**ITEMS[0], "unit_price": "1.005"}]},
            {"table_number": 5, "items": [{**ITEMS[0], "unit_price": "-5.00"}]},
        ],
    )
    def test_invalid_payload(self, client_for, waiter, table, payload):
        response = client_for(waiter).post(order_list_url(), payload, format="json")

        assert response.status_code == 400
        assert not Order.objects.exists()


class TestListOrders:
    def test_lists_newest_first_for_any_staff(self, client_for, chef):
        older = OrderFactory()
        newer = OrderFactory()

        response = client_for(chef).get(order_list_url())

        assert response.status_code == 200
        ids = [row["id"] for row in response.data["results"]]
        assert set(ids) == {str(older.id), str(newer.id)}

    def test_filters(self, client_for, admin_user, waiter, other_waiter):
        mine = OrderFactory(waiter=waiter, table_number=1)
        OrderFactory(waiter=other_waiter, table_number=2, status=OrderStatus.PREPARING)
        OrderFactory(waiter=other_waiter, table_number=3, status=OrderStatus.PAID)

        client = client_for(admin_user)

        by_waiter = client.get(order_list_url(), {"waiter": str(waiter.id)})
        assert [row["id"] for row in by_waiter.data["results"]] == [str(mine.id)]

        by_status = client.get(order_list_url(), {"status": ["pending", "preparing"]})
        assert {row["table_number"] for row in by_status.data["results"]} == {1, 2}

        by_table = client.get(order_list_url(), {"table_number": 3})
        assert by_table.data["count"] == 1

        by_payment = client.get(order_list_url(), {"payment_status": "unpaid"})
        assert by_payment.data["count"] == 3


class TestOrderDetail:
    def test_get_by_order_no(self, client_for, waiter, table):
        order = submit_order(table.number, waiter, ITEMS).order

        response = client_for(waiter).get(order_detail_url(order.order_no.lower()))

        assert response.status_code == 200
        assert response.data["id"] == str(order.id)
        assert [item["name"] for item in response.data["items"]] == ["Paneer Tikka", "Sweet Lassi"]

    def test_get_unknown(self, client_for, waiter):
        response = client_for(waiter).get(order_detail_url("NOPE0000"))
        assert response.status_code == 404


class TestChangeStatus:
    @pytest.fixture
    def order(self, waiter, table):
        return submit_order(table.number, waiter, ITEMS).order

    def test_chef_moves_order_through_kitchen(self, client_for, chef, order):
        client = client_for(chef)

        assert client.patch(order_detail_url(order.id), {"status": "preparing"}, format="json").status_code == 200
        response = client.patch(order_detail_url(order.id), {"status": "served"}, format="json")

        assert response.status_code == 200
        assert response.data["status"] == OrderStatus.SERVED

    @pytest.mark.parametrize("new_status", ["paid", "cancelled", "pending"])
    def test_chef_cannot_settle_or_cancel(self, client_for, chef, order, new_status):
        response = client_for(chef).patch(order_detail_url(order.id), {"status": new_status}, format="json")

        assert response.status_code == 403
        order.refresh_from_db()
        assert order.status == OrderStatus.PENDING

    def test_waiter_cannot_change_status(self, client_for, waiter, order):
        response = client_for(waiter).patch(order_detail_url(order.id), {"status": "preparing"}, format="json")
        assert response.status_code == 403

    def test_admin_settles_and_table_is_released(self, client_for, admin_user, order, table):
        response = client_for(admin_user).patch(order_detail_url(order.order_no), {"status": "paid"}, format="json")

        assert response.status_code == 200
        assert response.data["payment_status"] == "paid"
        table.refresh_from_db()
        assert table.status == TableStatus.AVAILABLE
        assert table.current_waiter is None

    def test_superuser_may_set_any_status(self, client_for, order):
        root = UserFactory(name="Root", role=UserRole.SUPERADMIN, is_superuser=True)
        response = client_for(root).patch(order_detail_url(order.id), {"status": "cancelled"}, format="json")
        assert response.status_code == 200

    def test_backwards_move_conflicts(self, client_for, admin_user, order):
        client = client_for(admin_user)
        client.patch(order_detail_url(order.id), {"status": "served"}, format="json")

        response = client.patch(order_detail_url(order.id), {"status": "pending"}, format="json")

        assert response.status_code == 409

    def test_unknown_status(self, client_for, admin_user, order):
        response = client_for(admin_user).patch(order_detail_url(order.id), {"status": "eaten"}, format="json")
        assert response.status_code == 400


class TestTableActiveOrder:
    def test_returns_open_order(self, client_for, waiter, table):
        order = submit_order(table.number, waiter, ITEMS).order

        response = client_for(waiter).get(reverse("orders:table-active-order", kwargs={"table_number": table.number}))

        assert response.status_code == 200
        assert response.data["order_no"] == order.order_no

    def test_no_open_order(self, client_for, waiter):
        table = TableFactory(number=8)
        OrderFactory(table_number=table.number, status=OrderStatus.PAID)

        response = client_for(waiter).get(reverse("orders:table-active-order", kwargs={"table_number": table.number}))

        assert response.status_code == 404
