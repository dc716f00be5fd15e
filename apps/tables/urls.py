from django.urls import path

from apps.tables import views

app_name = "tables"

urlpatterns = [
    path("", views.TableListView.as_view(), name="table-list"),  # GET
    path("manage/", views.TableManageView.as_view(), name="table-manage"),  # POST
    path("manage/<uuid:id>", views.TableManageDetailView.as_view(), name="table-manage-detail"),  # DELETE
    path("<uuid:id>/status", views.TableStatusView.as_view(), name="table-status"),  # PUT
]
