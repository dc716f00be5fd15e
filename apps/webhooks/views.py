from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.mixins import ServiceErrorMixin
from apps.webhooks.handlers import StripeEventProcessor
from apps.webhooks.permissions import HasValidStripeSignature


@extend_schema(exclude=True)
class StripeWebhookView(ServiceErrorMixin, APIView):
    authentication_classes = []
    permission_classes = [HasValidStripeSignature]
    throttle_classes = []

    def post(self, request):
        record = StripeEventProcessor(request.stripe_event).process()
        return Response({"received": True, "status": record.status}, status=status.HTTP_200_OK)
