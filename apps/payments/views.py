from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.mixins import ManagerMixin
from apps.payments.serializers import (
    CheckoutSessionResponseSerializer,
    InvoiceCreateSerializer,
    InvoiceSerializer,
    OrderReferenceSerializer,
    SessionStatusResponseSerializer,
    UpiQrResponseSerializer,
)
from apps.payments.services import StripeService, generate_upi_qr, issue_invoice


@extend_schema(
    summary="Admin: Create Stripe checkout session for an order",
    description="Returns the hosted checkout URL. The order becomes paid once Stripe confirms via webhook.",
    request=OrderReferenceSerializer,
    responses={200: CheckoutSessionResponseSerializer},
    tags=["payments", "stripe"],
)
class CheckoutSessionView(ManagerMixin, APIView):
    def post(self, request):
        serializer = OrderReferenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session_data = StripeService().create_checkout_session(serializer.validated_data["order"])
        return Response(CheckoutSessionResponseSerializer(session_data).data, status=status.HTTP_200_OK)


@extend_schema(
    summary="Admin: Check checkout session status",
    parameters=[
        OpenApiParameter(
            name="session_id",
            description="Stripe checkout session ID",
            required=True,
            type=str,
            location=OpenApiParameter.QUERY,
        )
    ],
    responses={200: SessionStatusResponseSerializer},
    tags=["payments", "stripe"],
)
class SessionStatusView(ManagerMixin, APIView):
    def get(self, request):
        session_id = request.query_params.get("session_id")
        if not session_id:
            return Response({"detail": "session_id parameter is required"}, status=status.HTTP_400_BAD_REQUEST)

        session_status = StripeService().retrieve_session_status(session_id)
        return Response(SessionStatusResponseSerializer(session_status).data)


@extend_schema(
    summary="Admin: UPI QR code for an order",
    request=OrderReferenceSerializer,
    responses={200: UpiQrResponseSerializer},
    tags=["payments"],
)
class UpiQrCodeView(ManagerMixin, APIView):
    def post(self, request):
        serializer = OrderReferenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = generate_upi_qr(serializer.validated_data["order"])
        return Response(UpiQrResponseSerializer(data).data)


@extend_schema(
    summary="Admin: Issue an invoice for an order",
    request=InvoiceCreateSerializer,
    responses={201: InvoiceSerializer},
    tags=["payments"],
)
class InvoiceView(ManagerMixin, APIView):
    def post(self, request):
        serializer = InvoiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invoice = issue_invoice(
            serializer.validated_data["order"],
            payment_method=serializer.validated_data["payment_method"],
        )
        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)
