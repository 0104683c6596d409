import pytest
from rest_framework.test import APIClient

from catalog.models import INSTALLATION_SERVICE_ID, Item, Product
from orders.validation import CartItem, CheckoutForm
from staff.auth import create_session
from staff.models import AdminUser
from staff.sessions import InMemorySessionStore, set_session_store


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture(autouse=True)
def session_store():
    store = InMemorySessionStore()
    set_session_store(store)
    yield store
    set_session_store(None)


@pytest.fixture
def upload_root(settings, tmp_path):
    settings.UPLOAD_ROOT = tmp_path
    return tmp_path


@pytest.fixture
def installation_service(db):
    item = Item.objects.create(
        id=INSTALLATION_SERVICE_ID,
        name="Serviço de instalação",
        price="150.00",
        is_available=True,
    )
    return Product.objects.create(item=item, category="pecas")


@pytest.fixture
def make_product(db):
    def make(name="Bebedouro Libell", price="899.90", category="bebedouros", is_available=True):
        item = Item.objects.create(
            name=name,
            price=price,
            image="/static/images/products/default.png",
            is_available=is_available,
        )
        return Product.objects.create(item=item, category=category)

    return make


@pytest.fixture
def checkout_form():
    def make(cart_items, **overrides):
        values = dict(
            email="cliente@example.com",
            phone="(67) 99999-9999",
            first_name="Maria",
            last_name="Silva",
            address="Rua 14 de Julho, 100",
            neighborhood="Centro",
            city="Campo Grande",
            state="ms",
            zip_code="79000-000",
            payment_method="pix",
            pix_key="cliente@example.com",
            cart_items=[
                CartItem(id=item.id, name=item.name, price=float(item.price), quantity=quantity)
                for item, quantity in cart_items
            ],
        )
        values.update(overrides)
        return CheckoutForm(**values)

    return make


@pytest.fixture
def make_admin(db):
    def make(username="admin", password="s3cret", role=AdminUser.ROLE_ADMIN):
        return AdminUser.objects.create_admin(username, password, role=role)

    return make


@pytest.fixture
def staff_client(make_admin, settings):
    """API client logged in as an admin with the requested role."""

    def make(role=AdminUser.ROLE_ADMIN, htmx=False):
        admin = make_admin(username=f"{role}-user", role=role)
        session = create_session(admin)
        client = APIClient()
        client.cookies[settings.ADMIN_SESSION_COOKIE] = session.token
        if htmx:
            client.credentials(HTTP_HX_REQUEST="true")
        return client

    return make
