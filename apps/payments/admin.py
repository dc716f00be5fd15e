from django.contrib import admin
from unfold.admin import ModelAdmin

from apps.payments.models import Invoice, PaymentSession


@admin.register(PaymentSession)
class PaymentSessionAdmin(ModelAdmin):
    list_display = ("order", "provider", "amount", "currency", "status", "created_at", "expires_at")
    list_filter = ("provider", "status", "created_at")
    search_fields = ("order__order_no", "stripe_session_id", "stripe_payment_intent_id")
    readonly_fields = ("order", "provider", "amount", "currency", "stripe_session_id", "stripe_payment_intent_id")


@admin.register(Invoice)
class InvoiceAdmin(ModelAdmin):
    list_display = ("invoice_no", "order", "table_number", "total", "payment_method", "created_at")
    list_filter = ("payment_method", "created_at")
    search_fields = ("invoice_no", "order__order_no")
    readonly_fields = (
        "invoice_no",
        "order",
        "table_number",
        "subtotal",
        "tax",
        "service_charge",
        "total",
        "payment_method",
        "restaurant_name",
        "created_at",
    )

    def has_add_permission(self, request):
        return False
