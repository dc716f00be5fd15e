from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from apps.orders.models import Order, OrderItem


class OrderItemInline(TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("line_no", "menu_item_id", "name", "unit_price", "quantity", "submission_key")
    can_delete = False

    def has_add_permission(self, request, obj):
        return False


@admin.register(Order)
class OrderAdmin(ModelAdmin):
    list_display = ("order_no", "table_number", "waiter_name", "status", "payment_status", "total", "created_at")
    list_filter = ("status", "payment_status", "created_at")
    search_fields = ("order_no", "waiter_name", "customer_name", "customer_email")
    readonly_fields = (
        "order_no",
        "table_number",
        "waiter",
        "waiter_name",
        "subtotal",
        "tax",
        "service_charge",
        "total",
        "status",
        "payment_status",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]

    def get_list_display_links(self, request, list_display):
        return ("order_no",)

    def has_add_permission(self, request):
        # Orders are opened through the API so the table lock stays consistent
        return False
