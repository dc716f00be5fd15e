from django.contrib import admin
from unfold.admin import ModelAdmin

from apps.menus.models import MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(ModelAdmin):
    list_display = ("name", "category", "price", "available")
    list_filter = ("category", "available")
    list_editable = ("available",)
    search_fields = ("name", "description")
    readonly_fields = ("created_at", "updated_at")
