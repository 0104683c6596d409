from django.urls import path

from .auth import BACK_OFFICE_ROLES, require_role
from .views import dashboard, login_view, logout_view

urlpatterns = [
    path("admin/login/", login_view, name="admin-login"),
    path("admin/logout/", logout_view, name="admin-logout"),
    path("admin/", require_role(*BACK_OFFICE_ROLES)(dashboard), name="admin-dashboard"),
]
