"""URL routing for payments."""

from django.urls import path  # type: ignore

from .views import (
    CreateOrderView,
    PaymentFailedView,
    PaymentStatusView,
    RazorpayWebhookView,
    VerifyPaymentView,
)

urlpatterns = [
    path('create-order/', CreateOrderView.as_view(), name='payment-create-order'),
    path('verify-payment/', VerifyPaymentView.as_view(), name='payment-verify'),
    path('status/<int:booking_id>/', PaymentStatusView.as_view(), name='payment-status'),
    path('payment-failed/', PaymentFailedView.as_view(), name='payment-failed'),
    path('webhook/', RazorpayWebhookView.as_view(), name='payment-webhook'),
]
