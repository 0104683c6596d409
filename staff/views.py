from django.conf import settings
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods

from catalog.services.brand_service import get_all_brands
from catalog.services.product_service import get_all_product_options

from . import auth


@require_http_methods(["GET", "POST"])
def login_view(request):
    if request.method == "GET":
        if auth.is_authenticated(request):
            return redirect("admin-dashboard")
        return render(request, "staff/admin-login.html")

    username = request.POST.get("username", "")
    password = request.POST.get("password", "")
    try:
        session = auth.login(username, password)
    except auth.InvalidCredentials as e:
        return render(request, "staff/admin-login.html", {"error": str(e)})

    response = redirect("admin-dashboard")
    auth.set_session_cookie(response, session)
    return response


def logout_view(request):
    auth.logout(request.COOKIES.get(settings.ADMIN_SESSION_COOKIE))
    response = redirect("admin-login")
    auth.clear_session_cookie(response)
    return response


@require_GET
def dashboard(request):
    return render(
        request,
        "staff/admin-dashboard.html",
        {
            "can_view_orders": True,
            "can_view_financial_data": request.admin_session.role == "admin",
            "brands": get_all_brands(),
            "product_options": get_all_product_options(),
        },
    )
