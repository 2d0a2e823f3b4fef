"""URL routing for payments."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import PaymentProofView, PaymentView

urlpatterns = [
    path("", PaymentView.as_view(), name="payment-list"),
    path("<uuid:payment_uuid>/proof/", PaymentProofView.as_view(), name="payment-proof"),
]
