import logging

import stripe
from django.conf import settings

from orders.services.order_service import (
    update_order_payment_status,
    update_order_stripe_payment_id,
)
from payments.exceptions import CheckoutValidationError, StripeNotConfigured

logger = logging.getLogger(__name__)

STRIPE_PAYMENT_METHOD_TYPES = {
    "credit_card": ["card"],
    "boleto": ["boleto"],
    "pix": ["pix"],
}


def get_stripe_secret_key():
    key = (settings.STRIPE_SECRET_KEY or "").strip()
    if not key:
        raise StripeNotConfigured()
    return key


def stripe_payment_method_types(method):
    try:
        return list(STRIPE_PAYMENT_METHOD_TYPES[method])
    except KeyError:
        raise CheckoutValidationError("paymentMethod", "Forma de pagamento inválida")


def stripe_line_items(cart_items):
    """Turn cart lines into Stripe line items priced in centavos."""
    if not cart_items:
        raise CheckoutValidationError("cart", "Seu carrinho está vazio")

    line_items = []
    for item in cart_items:
        if item.quantity <= 0:
            raise CheckoutValidationError("cart", "Quantidade inválida no carrinho")
        if item.price <= 0:
            raise CheckoutValidationError("cart", "Preço inválido no carrinho")

        unit_amount = int(round(item.price * 100))
        if unit_amount < 1:
            raise CheckoutValidationError("cart", "Preço inválido no carrinho")

        line_items.append(
            {
                "price_data": {
                    "currency": settings.STRIPE_CURRENCY,
                    "product_data": {"name": item.name},
                    "unit_amount": unit_amount,
                },
                "quantity": item.quantity,
            }
        )
    return line_items


def get_base_url():
    return (settings.BASE_URL or "").strip().rstrip("/") or "http://localhost:8000"


def create_checkout_session(form, order):
    """Open a Stripe hosted checkout for ``order`` and return its URL.

    The session id is stored on the order until the webhook replaces it with
    the payment intent id.
    """
    api_key = get_stripe_secret_key()
    payment_method_types = stripe_payment_method_types(form.payment_method)
    line_items = stripe_line_items(form.cart_items)
    base_url = get_base_url()

    try:
        session = stripe.checkout.Session.create(
            api_key=api_key,
            mode="payment",
            payment_method_types=payment_method_types,
            line_items=line_items,
            success_url=(
                f"{base_url}/checkout/success/?order_id={order.id}"
                "&session_id={CHECKOUT_SESSION_ID}"
            ),
            cancel_url=f"{base_url}/checkout/cancel/?order_id={order.id}",
            customer_email=form.email.strip(),
            client_reference_id=str(order.id),
            metadata={
                "order_id": str(order.id),
                "order_number": order.order_number,
                "cpf_cnpj": order.cpf_cnpj,
                "payment_method": form.payment_method,
            },
            idempotency_key=f"order-{order.order_number}",
        )
    except Exception:
        logger.exception(
            f"[Checkout] Error during Stripe checkout session creation for order {order.id}"
        )
        raise

    update_order_stripe_payment_id(order.id, session.id)
    logger.info(f"[Checkout] Stripe session {session.id} created for order {order.id}")
    return session.url


def complete_demo_payment(order):
    """Mark an order paid without Stripe; only used when demo mode is on."""
    reference = f"demo-{order.order_number}"
    update_order_payment_status(order.id, "paid", reference)
    logger.warning(f"[Checkout] Demo payment recorded for order {order.id}")
    return f"{get_base_url()}/checkout/success/?order_id={order.id}"
