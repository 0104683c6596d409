import logging
import time
from dataclasses import dataclass

from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from catalog.models import INSTALLATION_SERVICE_ID, Item
from orders.exceptions import InstallationServiceUnavailable, InvalidCartItem, OrderNotFound
from orders.filters import OrderFilter
from orders.models import Order, OrderItem
from orders.validation import PAYMENT_BOLETO

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


@dataclass
class OrderFilters:
    status: str = ""
    payment_status: str = ""
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


def calculate_total(cart_items):
    total = 0.0
    for item in cart_items:
        total += item.price * item.quantity
    return total


def generate_order_number():
    """Timestamp-based order number, e.g. ``ORD-1718000000000000000-123``.

    The suffix is derived from the timestamp itself, so two orders created in
    the same nanosecond collide; the unique constraint on the column rejects
    the second one.
    """
    timestamp = time.time_ns()
    return f"ORD-{timestamp}-{timestamp % 1000:03d}"


def check_cart_items(cart_items):
    """Reject cart lines that can not become order items."""
    for item in cart_items:
        if item.quantity <= 0:
            raise InvalidCartItem("Quantidade inválida no carrinho")
        if item.price < 0:
            raise InvalidCartItem("Preço inválido no carrinho")

    catalog = Item.objects.in_bulk({item.id for item in cart_items})
    for item in cart_items:
        catalog_item = catalog.get(item.id)
        if catalog_item is None:
            raise InvalidCartItem(f"Produto não encontrado: {item.name or item.id}")
        if item.id == INSTALLATION_SERVICE_ID and not catalog_item.is_available:
            raise InstallationServiceUnavailable()


def create_order(form):
    """Persist a validated checkout form as an order plus one item per cart line."""
    check_cart_items(form.cart_items)

    total_amount = round(calculate_total(form.cart_items), 2)
    order_number = generate_order_number()

    with transaction.atomic():
        order = Order.objects.create(
            order_number=order_number,
            email=form.email.strip(),
            phone=form.phone.strip(),
            first_name=form.first_name.strip(),
            last_name=form.last_name.strip(),
            address=form.address.strip(),
            neighborhood=form.neighborhood.strip(),
            city=form.city.strip(),
            state=form.state.strip().upper(),
            zip_code=form.zip_code.strip(),
            apartment=form.apartment.strip(),
            cpf_cnpj=form.cpf.strip() if form.payment_method == PAYMENT_BOLETO else "",
            payment_method=form.payment_method,
            total_amount=total_amount,
            status="pending",
        )

        for item in form.cart_items:
            OrderItem.objects.create(
                order=order,
                product_id=item.id,
                product_name=item.name,
                quantity=item.quantity,
                unit_price=item.price,
                total_price=round(item.price * item.quantity, 2),
            )

    logger.info(
        f"[Checkout] Created order {order.id} ({order.order_number}) "
        f"with {len(form.cart_items)} items, total {total_amount:.2f}"
    )
    return order


def update_order_payment_status(order_id, payment_status, stripe_payment_id):
    updated = Order.objects.filter(id=order_id).update(
        payment_status=payment_status,
        stripe_payment_id=stripe_payment_id,
        updated_at=timezone.now(),
    )
    if not updated:
        raise OrderNotFound(order_id)
    logger.info(f"[Order Update] Order {order_id} payment set to {payment_status}")


def update_order_stripe_payment_id(order_id, stripe_payment_id):
    updated = Order.objects.filter(id=order_id).update(
        stripe_payment_id=stripe_payment_id, updated_at=timezone.now()
    )
    if not updated:
        raise OrderNotFound(order_id)


def get_order_by_id(order_id):
    try:
        return Order.objects.get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFound(order_id)


def get_order_items(order_id):
    return list(OrderItem.objects.filter(order_id=order_id).order_by("id"))


def get_order_with_items(order_id):
    order = get_order_by_id(order_id)
    return order, get_order_items(order.id)


def _filtered_orders(filters):
    data = {}
    if filters.status:
        data["status"] = filters.status
    if filters.payment_status:
        data["payment_status"] = filters.payment_status
    return OrderFilter(data, queryset=Order.objects.all()).qs


def get_orders(filters=None):
    filters = filters or OrderFilters()
    queryset = _filtered_orders(filters).order_by("-created_at", "-id")
    return list(queryset[filters.offset : filters.offset + filters.limit])


def get_order_totals(filters=None):
    """Order count, gross amount and paid amount over the filtered orders."""
    filters = filters or OrderFilters()
    totals = _filtered_orders(filters).aggregate(
        order_count=Count("id"),
        gross_amount=Sum("total_amount"),
        paid_amount=Sum("total_amount", filter=Q(payment_status="paid")),
    )
    return {
        "order_count": totals["order_count"] or 0,
        "total_amount": totals["gross_amount"] or 0,
        "paid_amount": totals["paid_amount"] or 0,
    }
