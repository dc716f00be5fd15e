from django.urls import path

from apps.orders import views

app_name = "orders"

urlpatterns = [
    path("", views.OrderListCreateView.as_view(), name="order-list"),  # GET list, POST submit
    path("table/<int:table_number>/active", views.TableActiveOrderView.as_view(), name="table-active-order"),
    path("<str:order_ref>", views.OrderDetailView.as_view(), name="order-detail"),  # GET, PATCH status
]
