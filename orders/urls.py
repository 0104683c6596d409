from django.urls import path

from staff.auth import BACK_OFFICE_ROLES, require_role

from . import views

back_office = require_role(*BACK_OFFICE_ROLES)

urlpatterns = [
    path("", views.index, name="index"),
    path("checkout/", views.checkout_page, name="checkout"),
    path("cart-modal/", views.cart_modal, name="cart-modal"),
    path(
        "installation-service-modal/",
        views.installation_service_modal,
        name="installation-service-modal",
    ),
    path("api/checkout/", views.submit_checkout, name="checkout-submit"),
    path("checkout/success/", views.checkout_success, name="checkout-success"),
    path("checkout/cancel/", views.checkout_cancel, name="checkout-cancel"),
    path("admin/orders/", back_office(views.admin_orders_page), name="admin-orders"),
    path(
        "api/admin/orders/",
        back_office(views.AdminOrderListView.as_view()),
        name="admin-api-orders",
    ),
    path(
        "api/admin/orders/<int:order_id>/",
        back_office(views.AdminOrderDetailView.as_view()),
        name="admin-api-order-detail",
    ),
]
