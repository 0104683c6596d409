from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from catalog.models import INSTALLATION_SERVICE_ID, Brand, Item, Product
from catalog.services.product_service import get_product_by_id
from staff.models import AdminUser

pytestmark = pytest.mark.django_db


def png(name="foto.png", size=32):
    return SimpleUploadedFile(name, b"\x89PNG" + b"0" * size, content_type="image/png")


class TestPublicListing:
    def test_category_cards(self, client, make_product):
        make_product(name="Bebedouro Libell")
        make_product(name="Purificador", category="purificadores")

        response = client.get("/products/bebedouros/")

        assert response.status_code == 200
        assert "Bebedouro Libell" in response.content.decode()
        assert "Purificador" not in response.content.decode()

    def test_empty_state(self, client, db):
        response = client.get("/products/refis/")
        assert response.status_code == 200
        assert "Nenhum produto encontrado" in response.content.decode()

    def test_unknown_category(self, client, db):
        assert client.get("/products/geladeiras/").status_code == 404

    def test_all_products(self, client, make_product):
        make_product(name="Refil X", category="refis")
        response = client.get("/products/all/")
        assert "Refil X" in response.content.decode()


class TestAdminAccess:
    def test_anonymous_is_redirected(self, client, db):
        response = client.get("/api/admin/products/")
        assert response.status_code == 302
        assert response["Location"] == "/admin/login/"


class TestAdminProducts:
    def test_list_json(self, staff_client, make_product):
        product = make_product(name="Bebedouro")

        response = staff_client().get("/api/admin/products/")

        assert response.status_code == 200
        body = response.json()
        assert body[0]["id"] == product.item.id
        assert body[0]["productId"] == product.id
        assert body[0]["name"] == "Bebedouro"
        assert body[0]["isAvailable"] is True

    def test_list_fragment_for_htmx(self, staff_client, make_product):
        make_product(name="Bebedouro")
        response = staff_client(htmx=True).get("/api/admin/products/")
        assert response.status_code == 200
        assert "admin-product-" in response.content.decode()

    def test_create_product(self, staff_client, upload_root, installation_service):
        brand = Brand.objects.create(name="IBBL")

        response = staff_client(role=AdminUser.ROLE_PRODUCT_ADMIN).post(
            "/api/admin/products/",
            {
                "name": "Bebedouro IBBL",
                "price": "799.90",
                "category": "bebedouros",
                "is_available": "true",
                "brand_ids": [str(brand.id)],
                "image": png(),
            },
            format="multipart",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Bebedouro IBBL"
        assert body["brandIds"] == [brand.id]
        assert body["image"].startswith("/static/images/uploads/")
        assert len(list(upload_root.iterdir())) == 1

    def test_create_requires_image(self, staff_client, upload_root):
        response = staff_client().post(
            "/api/admin/products/",
            {"name": "Sem foto", "price": "10", "category": "bebedouros"},
            format="multipart",
        )
        assert response.status_code == 400
        assert not Item.objects.exists()

    def test_create_rejects_non_image(self, staff_client, upload_root):
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        response = staff_client().post(
            "/api/admin/products/",
            {"name": "X", "price": "10", "category": "bebedouros", "image": upload},
            format="multipart",
        )
        assert response.status_code == 400
        assert "Image upload failed" in response.json()["error"]
        assert list(upload_root.iterdir()) == []

    def test_create_error_fragment_for_htmx(self, staff_client, upload_root, make_product):
        cooler = make_product()
        response = staff_client(htmx=True).post(
            "/api/admin/products/",
            {
                "name": "Purificador",
                "price": "10",
                "category": "purificadores",
                "fits_product_ids": [str(cooler.id)],
                "image": png(),
            },
            format="multipart",
        )
        assert response.status_code == 200
        assert "admin-error" in response.content.decode()

    def test_update_product(self, staff_client, upload_root, installation_service, make_product):
        product = make_product(name="Antigo")

        response = staff_client().put(
            f"/api/admin/products/{product.item.id}/",
            {
                "name": "Novo",
                "price": "123.45",
                "category": "bebedouros",
                "current_image": product.item.image,
            },
            format="multipart",
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Product updated successfully"}
        updated = get_product_by_id(product.item.id)
        assert updated.item.name == "Novo"
        assert updated.item.price == Decimal("123.45")
        assert updated.item.is_available is False
        assert updated.item.image == product.item.image

    def test_update_htmx_closes_modal(self, staff_client, upload_root, installation_service, make_product):
        product = make_product()
        response = staff_client(htmx=True).put(
            f"/api/admin/products/{product.item.id}/",
            {"name": "Novo", "price": "1", "category": "bebedouros", "is_available": "true"},
            format="multipart",
        )
        assert response.status_code == 200
        assert response["HX-Trigger"] == "closeEditModal"
        assert "Novo" in response.content.decode()

    def test_update_missing_product(self, staff_client, upload_root):
        response = staff_client().put(
            "/api/admin/products/999/",
            {"name": "Novo", "price": "1", "category": "bebedouros"},
            format="multipart",
        )
        assert response.status_code == 404

    def test_delete_product(self, staff_client, installation_service, make_product):
        product = make_product()
        response = staff_client().delete(f"/api/admin/products/{product.item.id}/")
        assert response.status_code == 200
        assert not Product.objects.filter(id=product.id).exists()

    def test_delete_installation_service_is_refused(self, staff_client, installation_service):
        response = staff_client().delete(f"/api/admin/products/{INSTALLATION_SERVICE_ID}/")
        assert response.status_code == 400
        assert response.json()["error"] == "Não é possível excluir o serviço de instalação"
        assert Item.objects.filter(id=INSTALLATION_SERVICE_ID).exists()

    def test_edit_form(self, staff_client, installation_service, make_product):
        product = make_product(name="Refil", category="refis")
        response = staff_client().get(f"/admin/products/{product.item.id}/edit/")
        assert response.status_code == 200
        assert "Editar Refil" in response.content.decode()


class TestAdminBrands:
    def test_create_brand_json(self, staff_client):
        response = staff_client().post("/api/admin/brands/", {"name": " IBBL "}, format="json")
        assert response.status_code == 201
        assert response.json()["name"] == "IBBL"

    def test_duplicate_brand_json(self, staff_client):
        Brand.objects.create(name="IBBL")
        response = staff_client().post("/api/admin/brands/", {"name": "IBBL"}, format="json")
        assert response.status_code == 400
        assert response.json() == {"error": "marca ja cadastrada"}

    def test_create_brand_htmx(self, staff_client):
        response = staff_client(htmx=True).post("/api/admin/brands/", {"name": "Libell"})
        assert response.status_code == 204
        assert response["HX-Trigger"] == "refreshBrands,closeBrandModal"

    def test_empty_brand_htmx_rerenders_modal(self, staff_client):
        response = staff_client(htmx=True).post("/api/admin/brands/", {"name": ""})
        assert response.status_code == 400
        assert "nome da marca nao pode ser vazio" in response.content.decode()

    def test_brand_options(self, staff_client):
        Brand.objects.create(name="Esmaltec")
        response = staff_client().get("/api/admin/brands/options/")
        assert "Esmaltec" in response.content.decode()
