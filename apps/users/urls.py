from django.urls import path

from . import views

app_name = "users"

urlpatterns = [
    path("", views.StaffView.as_view(), name="staff"),  # GET list, POST create
    path("<uuid:id>", views.StaffDetailView.as_view(), name="staff-detail"),  # DELETE
]
