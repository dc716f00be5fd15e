from django.urls import path

from apps.payments import views

app_name = "payments"

urlpatterns = [
    path("checkout/", views.CheckoutSessionView.as_view(), name="checkout"),  # POST
    path("status/", views.SessionStatusView.as_view(), name="session-status"),  # GET
    path("qr-code/", views.UpiQrCodeView.as_view(), name="qr-code"),  # POST
    path("invoices/", views.InvoiceView.as_view(), name="invoices"),  # POST
]
