"""API views for the payment lifecycle."""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsTenant
from config.container import get_container

from .application.command_handlers import (
    CreatePaymentCommand,
    UpdatePaymentCommand,
    UploadPaymentProofCommand,
)
from .serializers import (
    PaymentCreateSerializer,
    PaymentProofSerializer,
    PaymentSerializer,
    PaymentUpdateSerializer,
    TenantPaymentSerializer,
    TenantPaymentsQuerySerializer,
)


class PaymentView(APIView):
    """POST creates a booking payment, GET and PATCH are the tenant side."""

    def get_permissions(self):  # type: ignore
        if self.request.method == "POST":
            return [permissions.IsAuthenticated()]
        return [permissions.IsAuthenticated(), IsTenant()]

    def post(self, request):  # type: ignore
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = get_container().create_payment.handle(
            CreatePaymentCommand(**serializer.validated_data),
            request.user,
        )
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    def get(self, request):  # type: ignore
        query = TenantPaymentsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = dict(query.validated_data)
        page = get_container().tenant_payments.list(
            request.user,
            params.pop("q", None),
            params.pop("status", None),
            **params,
        )
        return Response(
            {
                "data": TenantPaymentSerializer(page.items, many=True).data,
                "meta": page.meta,
            }
        )

    def patch(self, request):  # type: ignore
        serializer = PaymentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        payment = get_container().update_payment.handle(
            UpdatePaymentCommand(payment_uuid=data["uuid"], type=data["type"]),
            request.user,
        )
        action = "Accept" if payment.status == payment.Status.PAID else "Reject"
        return Response({"message": f"{action} payment success", "status": payment.status})


class PaymentProofView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, payment_uuid):  # type: ignore
        serializer = PaymentProofSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = get_container().upload_payment_proof.handle(
            UploadPaymentProofCommand(
                payment_uuid=payment_uuid,
                payment_proof=serializer.validated_data["payment_proof"],
            ),
            request.user,
        )
        return Response(
            {"message": "Payment proof uploaded successfully", "status": payment.status}
        )
