from django.contrib import admin
from unfold.admin import ModelAdmin

from apps.tables.models import Table


@admin.register(Table)
class TableAdmin(ModelAdmin):
    list_display = ("number", "name", "seating_capacity", "status", "current_waiter")
    list_filter = ("status",)
    search_fields = ("name", "number")
    ordering = ("number",)
    # Occupancy is driven by orders; use the status override endpoint to change it
    readonly_fields = ("status", "current_waiter", "created_at", "updated_at")
