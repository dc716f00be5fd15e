from django.contrib import admin
from unfold.admin import ModelAdmin

from apps.webhooks.models import StripeEvent


@admin.register(StripeEvent)
class StripeEventAdmin(ModelAdmin):
    list_display = ["event_id", "event_type", "object_id", "status", "attempts", "processed_at", "created_at"]
    list_filter = ["status", "event_type"]
    search_fields = ["event_id", "object_id", "payment_session__order__order_no"]
    readonly_fields = [f.name for f in StripeEvent._meta.fields]
    ordering = ["-created_at"]

    def has_add_permission(self, request):
        return False
