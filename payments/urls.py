from django.urls import path

from payments.webhooks.stripe_webhooks import handle_stripe_event

urlpatterns = [
    path("api/stripe/webhook/", handle_stripe_event, name="stripe-webhook"),
]
