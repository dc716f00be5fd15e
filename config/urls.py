from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

swagger_urls = [
    path("schema/swagger-ui/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("schema/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]

api_urls = [
    path("auth/", include("apps.authentication.urls", namespace="authentication")),
    path("users/", include("apps.users.urls", namespace="users")),
    path("tables/", include("apps.tables.urls", namespace="tables")),
    path("menu/", include("apps.menus.urls", namespace="menus")),
    path("orders/", include("apps.orders.urls", namespace="orders")),
    path("reports/", include("apps.reports.urls", namespace="reports")),
    path("payments/", include("apps.payments.urls", namespace="payments")),
    path("webhooks/", include("apps.webhooks.urls", namespace="webhooks")),
    path("", include(swagger_urls)),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include(api_urls)),
]
