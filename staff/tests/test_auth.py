import pytest
from django.core.management import CommandError, call_command

from staff import auth
from staff.models import AdminUser

pytestmark = pytest.mark.django_db


class TestLogin:
    def test_login_opens_session(self, make_admin, session_store):
        admin = make_admin(role=AdminUser.ROLE_PRODUCT_ADMIN)

        session = auth.login("admin", "s3cret")

        assert session.admin_id == admin.id
        assert session.role == "product_admin"
        assert session_store.get(session.token) == session

    def test_wrong_password(self, make_admin):
        make_admin()
        with pytest.raises(auth.InvalidCredentials, match="Credenciais Inválidas"):
            auth.login("admin", "nope")

    def test_unknown_user(self):
        with pytest.raises(auth.InvalidCredentials):
            auth.login("ghost", "s3cret")

    def test_logout_removes_session(self, make_admin, session_store):
        make_admin()
        session = auth.login("admin", "s3cret")

        auth.logout(session.token)

        assert session_store.get(session.token) is None

    def test_tokens_are_unique(self):
        assert auth.generate_session_token() != auth.generate_session_token()


class TestLoginViews:
    def test_login_page(self, client):
        response = client.get("/admin/login/")
        assert response.status_code == 200
        assert "Área administrativa" in response.content.decode()

    def test_login_sets_cookie_and_redirects(self, client, make_admin, settings):
        make_admin()

        response = client.post("/admin/login/", {"username": "admin", "password": "s3cret"})

        assert response.status_code == 302
        assert response["Location"] == "/admin/"
        cookie = response.cookies[settings.ADMIN_SESSION_COOKIE]
        assert cookie["httponly"]
        assert cookie["samesite"] == "Strict"
        assert cookie["max-age"] == 86400

    def test_login_error_is_rendered(self, client, make_admin):
        make_admin()
        response = client.post("/admin/login/", {"username": "admin", "password": "x"})
        assert response.status_code == 200
        assert "Credenciais Inválidas" in response.content.decode()

    def test_logged_in_user_skips_login_page(self, staff_client):
        response = staff_client().get("/admin/login/")
        assert response.status_code == 302
        assert response["Location"] == "/admin/"

    def test_logout(self, staff_client, session_store, settings):
        client = staff_client()
        token = client.cookies[settings.ADMIN_SESSION_COOKIE].value

        response = client.get("/admin/logout/")

        assert response.status_code == 302
        assert response["Location"] == "/admin/login/"
        assert session_store.get(token) is None


class TestRequireRole:
    def test_dashboard_requires_login(self, client):
        response = client.get("/admin/")
        assert response.status_code == 302
        assert response["Location"] == "/admin/login/"

    def test_dashboard_for_admin(self, staff_client):
        response = staff_client().get("/admin/")
        assert response.status_code == 200
        assert response.context["can_view_financial_data"] is True

    def test_dashboard_for_product_admin(self, staff_client):
        response = staff_client(role=AdminUser.ROLE_PRODUCT_ADMIN).get("/admin/")
        assert response.status_code == 200
        assert response.context["can_view_financial_data"] is False

    def test_other_roles_are_forbidden(self, rf, session_store, make_admin, settings):
        admin = make_admin(role=AdminUser.ROLE_PRODUCT_ADMIN)
        session = auth.create_session(admin)
        view = auth.require_role("admin")(lambda request: "ok")

        request = rf.get("/admin/reports/")
        request.COOKIES[settings.ADMIN_SESSION_COOKIE] = session.token

        assert view(request).status_code == 403

    def test_expired_session_redirects(self, client, make_admin, settings):
        admin = make_admin()
        settings.ADMIN_SESSION_TTL = -settings.ADMIN_SESSION_TTL
        session = auth.create_session(admin)
        client.cookies[settings.ADMIN_SESSION_COOKIE] = session.token

        assert client.get("/admin/").status_code == 302


class TestCreateAdminCommand:
    def test_creates_admin(self):
        call_command("create_admin", "maria", "s3cret", "--role", "product_admin")
        admin = AdminUser.objects.get(username="maria")
        assert admin.role == "product_admin"
        assert admin.check_password("s3cret")

    def test_duplicate_username(self, make_admin):
        make_admin(username="maria")
        with pytest.raises(CommandError):
            call_command("create_admin", "maria", "other")
