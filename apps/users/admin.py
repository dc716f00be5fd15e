from django import forms
from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import User


class StaffAdminForm(forms.ModelForm):
    pin = forms.RegexField(
        regex=r"^\d{4,8}$",
        required=False,
        help_text="4 to 8 digits. Leave empty to keep the current PIN.",
        widget=forms.PasswordInput(render_value=False),
    )

    class Meta:
        model = User
        fields = ("name", "email", "role", "is_active")

    def clean(self):
        cleaned = super().clean()
        if self.instance._state.adding and not cleaned.get("pin"):
            self.add_error("pin", "A PIN is required for new staff members.")
        return cleaned

    def save(self, commit=True):
        user = super().save(commit=False)
        if self.cleaned_data.get("pin"):
            user.set_pin(self.cleaned_data["pin"])
        if commit:
            user.save()
        return user


@admin.register(User)
class UserAdmin(ModelAdmin):
    form = StaffAdminForm
    list_display = ("name", "role", "email", "is_active", "is_staff", "last_login")
    list_filter = ("role", "is_active")
    search_fields = ("name", "email")
    ordering = ("name",)
    readonly_fields = ("last_login", "created_at", "updated_at")
    fieldsets = (
        (None, {"fields": ("name", "pin")}),
        ("Role", {"fields": ("role", "is_active")}),
        ("Contact", {"fields": ("email",)}),
        ("Important dates", {"fields": ("last_login", "created_at", "updated_at")}),
    )
