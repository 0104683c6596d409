import logging

from django.conf import settings
from django.http import HttpResponse, HttpResponseBadRequest
from django.shortcuts import render
from django.views.decorators.http import require_GET, require_POST
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from payments.exceptions import CheckoutValidationError, StripeNotConfigured
from payments.services.checkout_service import (
    complete_demo_payment,
    create_checkout_session,
)
from storefront.negotiation import negotiated_response, renders_fragment

from .exceptions import InstallationServiceUnavailable, InvalidCartItem, OrderNotFound
from .serializers import OrderItemSerializer, OrderSerializer
from .services.order_service import (
    DEFAULT_PAGE_SIZE,
    OrderFilters,
    create_order,
    get_order_by_id,
    get_order_totals,
    get_order_with_items,
    get_orders,
)
from .validation import CheckoutForm, FieldError, validate_checkout_form

logger = logging.getLogger(__name__)


@require_GET
def index(request):
    return render(request, "orders/index.html")


@require_GET
def checkout_page(request):
    return render(request, "orders/checkout.html")


@require_GET
def cart_modal(request):
    return render(request, "orders/cart-modal.html")


@require_GET
def installation_service_modal(request):
    return render(request, "orders/installation-service-modal.html")


def _validation_error(request, field, message):
    return render(
        request,
        "orders/validation-error.html",
        {"error": FieldError(field, message)},
    )


@require_POST
def submit_checkout(request):
    if not request.POST.get("cart_items"):
        return _validation_error(request, "cart", "Seu carrinho está vazio")

    try:
        form = CheckoutForm.from_post(request.POST)
    except ValueError as e:
        logger.warning(f"[Checkout] {e}")
        return HttpResponseBadRequest("Invalid cart data")

    result = validate_checkout_form(form)
    if not result.is_valid:
        error = result.first_error
        return _validation_error(request, error.field, error.message)

    try:
        order = create_order(form)
    except (InvalidCartItem, InstallationServiceUnavailable) as e:
        return _validation_error(request, "cart", str(e))
    except Exception as e:
        logger.exception(f"[Checkout] Failed to create order: {e}")
        return _validation_error(
            request, "general", "Erro ao processar pedido. Tente novamente."
        )

    try:
        redirect_url = create_checkout_session(form, order)
    except StripeNotConfigured:
        if not settings.PAYMENT_DEMO_MODE:
            logger.error(f"[Checkout] Stripe not configured; order {order.id} left pending")
            return _validation_error(
                request, "general", "Pagamento temporariamente indisponível."
            )
        redirect_url = complete_demo_payment(order)
    except CheckoutValidationError as e:
        return _validation_error(request, e.field, e.message)
    except Exception as e:
        logger.error(f"[Checkout] Failed to create Stripe session: {e}")
        return _validation_error(
            request, "general", "Erro ao iniciar pagamento. Tente novamente."
        )

    response = HttpResponse(status=200)
    response["HX-Redirect"] = redirect_url
    return response


def _order_page(request, template_name):
    try:
        order_id = int(request.GET.get("order_id", ""))
    except ValueError:
        return HttpResponseBadRequest("Invalid order ID")

    try:
        order = get_order_by_id(order_id)
    except OrderNotFound:
        return HttpResponse("Pedido não encontrado", status=404)

    return render(request, template_name, {"order": order})


@require_GET
def checkout_success(request):
    return _order_page(request, "orders/checkout-success-page.html")


@require_GET
def checkout_cancel(request):
    return _order_page(request, "orders/checkout-cancel-page.html")


@require_GET
def admin_orders_page(request):
    return render(request, "orders/admin-orders.html")


def _can_view_financial_data(request):
    return request.admin_session.role == "admin"


def _int_param(params, name, default):
    value = params.get(name)
    if value in (None, ""):
        return default
    number = int(value)
    if number < 0:
        raise ValueError(f"{name} must not be negative")
    return number


class AdminOrderListView(APIView):
    def get(self, request):
        params = request.query_params
        try:
            filters = OrderFilters(
                status=params.get("status", ""),
                payment_status=params.get("payment_status", ""),
                limit=_int_param(params, "limit", DEFAULT_PAGE_SIZE),
                offset=_int_param(params, "offset", 0),
            )
        except ValueError as e:
            if renders_fragment(request):
                return HttpResponseBadRequest(str(e))
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        orders = get_orders(filters)
        can_view_financial_data = _can_view_financial_data(request)
        totals = get_order_totals(filters) if can_view_financial_data else None

        data = {
            "orders": OrderSerializer(
                orders,
                many=True,
                context={"can_view_financial_data": can_view_financial_data},
            ).data
        }
        if totals is not None:
            data["totals"] = {
                "order_count": totals["order_count"],
                "total_amount": float(totals["total_amount"]),
                "paid_amount": float(totals["paid_amount"]),
            }

        return negotiated_response(
            request,
            data,
            "orders/admin-orders-list.html",
            context={
                "orders": orders,
                "totals": totals,
                "can_view_financial_data": can_view_financial_data,
            },
        )


class AdminOrderDetailView(APIView):
    def get(self, request, order_id):
        try:
            order, items = get_order_with_items(order_id)
        except OrderNotFound as e:
            if renders_fragment(request):
                return HttpResponse(str(e), status=404)
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)

        can_view_financial_data = _can_view_financial_data(request)
        context = {"can_view_financial_data": can_view_financial_data}
        data = {
            "order": OrderSerializer(order, context=context).data,
            "items": OrderItemSerializer(items, many=True, context=context).data,
        }
        return negotiated_response(
            request,
            data,
            "orders/admin-order-detail.html",
            context={"order": order, "items": items, **context},
        )
