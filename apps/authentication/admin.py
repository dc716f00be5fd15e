from django.contrib import admin, messages
from unfold.admin import ModelAdmin

from apps.authentication.models import Session
from apps.authentication.session_service import SessionService


@admin.register(Session)
class SessionAdmin(ModelAdmin):
    list_display = ("user_name", "user_role", "ip", "created_at", "last_used_at", "expires_at")
    list_filter = ("user_role", "created_at")
    search_fields = ("user_name", "ip", "user_agent")
    readonly_fields = ("token", "user", "user_name", "user_role", "ip", "user_agent", "created_at", "last_used_at")
    actions = ["purge_expired"]

    def has_add_permission(self, request):
        return False

    @admin.action(description="Purge all expired sessions")
    def purge_expired(self, request, queryset):
        purged = SessionService.purge_expired()
        self.message_user(request, f"Purged {purged} expired session(s).", messages.SUCCESS)
