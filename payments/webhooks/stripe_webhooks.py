import logging

import stripe
from django.conf import settings
from django.http import HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from orders.exceptions import OrderNotFound
from orders.services.order_service import update_order_payment_status

logger = logging.getLogger(__name__)

PAYMENT_STATUS_BY_EVENT = {
    "checkout.session.completed": "paid",
    "checkout.session.async_payment_succeeded": "paid",
    "checkout.session.async_payment_failed": "failed",
}


def _payment_reference(session):
    """Prefer the payment intent id; fall back to the session id."""
    payment_intent = session.get("payment_intent")
    if isinstance(payment_intent, str) and payment_intent:
        return payment_intent
    if payment_intent and payment_intent.get("id"):
        return payment_intent["id"]
    return session.get("id", "")


@csrf_exempt
@require_POST
def handle_stripe_event(request):
    endpoint_secret = (settings.STRIPE_WEBHOOK_SECRET or "").strip()
    if not endpoint_secret:
        logger.error("[Stripe Webhook] Webhook secret not configured")
        return HttpResponse("Webhook secret not configured", status=500)

    payload = request.body
    sig_header = request.headers.get("Stripe-Signature", "")

    try:
        event = stripe.Webhook.construct_event(payload, sig_header, endpoint_secret)
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.error(f"[Stripe Webhook] Signature Error: {e}")
        return HttpResponse("Invalid signature", status=400)

    event_type = event["type"]
    payment_status = PAYMENT_STATUS_BY_EVENT.get(event_type)
    if payment_status is None:
        logger.info(f"[Stripe Webhook] Ignoring event {event_type}")
        return HttpResponse(status=200)

    session = event["data"]["object"]
    metadata = session.get("metadata") or {}
    order_id_text = str(metadata.get("order_id") or "").strip()
    if not order_id_text:
        logger.error(f"[Stripe Webhook] Missing order metadata: {dict(metadata)}")
        return HttpResponse("Missing order metadata", status=400)

    try:
        order_id = int(order_id_text)
    except ValueError:
        logger.error(f"[Stripe Webhook] Invalid order metadata: {dict(metadata)}")
        return HttpResponse("Invalid order metadata", status=400)

    try:
        update_order_payment_status(order_id, payment_status, _payment_reference(session))
    except OrderNotFound:
        logger.error(f"[Stripe Webhook] No order found with id: {order_id}")
    except Exception as e:
        logger.exception(f"[Stripe Webhook] Failed to update payment status: {e}")
        return HttpResponse(status=500)

    return HttpResponse(status=200)
