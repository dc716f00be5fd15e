from django.urls import path

from apps.reports import views

app_name = "reports"

urlpatterns = [
    path("summary", views.SummaryView.as_view(), name="summary"),
]
