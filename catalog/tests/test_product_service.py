from decimal import Decimal

import pytest

from catalog.exceptions import (
    BrandNotFound,
    CompatibilityError,
    DuplicateBrandError,
    InvalidBrandName,
    ProductNotFound,
    ProtectedProductError,
)
from catalog.models import INSTALLATION_SERVICE_ID, Brand, Item, Product, ProductBrand, ProductCompatibility
from catalog.services.brand_service import create_brand, get_all_brands
from catalog.services.product_service import (
    create_product,
    delete_product,
    get_all_product_options,
    get_all_products,
    get_product_by_id,
    get_products_by_category,
    update_product,
)

pytestmark = pytest.mark.django_db


@pytest.fixture
def brands():
    return [Brand.objects.create(name="IBBL"), Brand.objects.create(name="Libell")]


def test_create_product_with_brands(installation_service, brands):
    product = create_product(
        "Bebedouro IBBL", Decimal("799.00"), "/img.png", "bebedouros", True,
        brand_ids=[brands[0].id, brands[1].id, brands[0].id],
    )

    loaded = get_product_by_id(product.item.id)
    assert loaded.item.name == "Bebedouro IBBL"
    assert loaded.category == "bebedouros"
    assert loaded.brand_ids == [brands[0].id, brands[1].id]
    assert loaded.fits_product_ids == []


def test_create_product_with_unknown_brand_rolls_back(installation_service):
    with pytest.raises(BrandNotFound):
        create_product("X", Decimal("1.00"), "", "bebedouros", True, brand_ids=[404])
    assert not Item.objects.exclude(id=INSTALLATION_SERVICE_ID).exists()


def test_compatibility_only_for_parts(installation_service, make_product):
    cooler = make_product()

    part = create_product(
        "Refil IBBL", Decimal("49.90"), "", "refis", True, fits_product_ids=[cooler.id]
    )
    assert get_product_by_id(part.item.id).fits_product_ids == [cooler.id]
    assert list(cooler.compatible_parts.all()) == [part]

    with pytest.raises(CompatibilityError):
        create_product(
            "Purificador", Decimal("500.00"), "", "purificadores", True,
            fits_product_ids=[cooler.id],
        )


def test_compatibility_rejects_self_and_unknown(installation_service, make_product):
    part = make_product(name="Peça", category="pecas")

    with pytest.raises(CompatibilityError, match="consigo mesmo"):
        update_product(part.item.id, "Peça", Decimal("10.00"), "", "pecas", True,
                       fits_product_ids=[part.id])
    with pytest.raises(CompatibilityError, match="nao encontrado"):
        update_product(part.item.id, "Peça", Decimal("10.00"), "", "pecas", True,
                       fits_product_ids=[9999])


def test_update_product_replaces_links(installation_service, make_product, brands):
    cooler = make_product()
    other = make_product(name="Outro")
    part = create_product(
        "Refil", Decimal("40.00"), "/a.png", "refis", True,
        brand_ids=[brands[0].id], fits_product_ids=[cooler.id],
    )

    update_product(
        part.item.id, "Refil novo", Decimal("45.00"), "/b.png", "refis", False,
        brand_ids=[brands[1].id], fits_product_ids=[other.id],
    )

    loaded = get_product_by_id(part.item.id)
    assert loaded.item.name == "Refil novo"
    assert loaded.item.price == Decimal("45.00")
    assert loaded.item.image == "/b.png"
    assert loaded.item.is_available is False
    assert loaded.brand_ids == [brands[1].id]
    assert loaded.fits_product_ids == [other.id]


def test_update_missing_product():
    with pytest.raises(ProductNotFound):
        update_product(4242, "x", Decimal("1.00"), "", "bebedouros", True)


def test_installation_service_can_not_be_deleted(installation_service):
    with pytest.raises(ProtectedProductError):
        delete_product(INSTALLATION_SERVICE_ID)
    assert Item.objects.filter(id=INSTALLATION_SERVICE_ID).exists()


def test_delete_product_removes_links(installation_service, make_product, brands):
    cooler = make_product()
    part = create_product(
        "Refil", Decimal("40.00"), "", "refis", True,
        brand_ids=[brands[0].id], fits_product_ids=[cooler.id],
    )
    other_part = create_product(
        "Peça", Decimal("10.00"), "", "pecas", True, fits_product_ids=[cooler.id]
    )

    delete_product(cooler.item.id)

    assert not Item.objects.filter(id=cooler.item.id).exists()
    assert not Product.objects.filter(id=cooler.id).exists()
    assert not ProductCompatibility.objects.filter(fits_product_id=cooler.id).exists()
    assert Product.objects.filter(id=other_part.id).exists()

    delete_product(part.item.id)
    assert not ProductBrand.objects.filter(product_id=part.id).exists()


def test_delete_missing_product():
    with pytest.raises(ProductNotFound):
        delete_product(4242)


def test_listing(installation_service, make_product):
    cooler = make_product(name="B")
    purifier = make_product(name="A", category="purificadores")

    assert [p.id for p in get_all_products()] == [purifier.id, cooler.id, installation_service.id]
    assert get_products_by_category("purificadores") == [purifier]
    assert len(get_products_by_category("")) == 3
    assert [o["item__name"] for o in get_all_product_options()] == [
        "A",
        "B",
        "Serviço de instalação",
    ]


class TestBrands:
    def test_create_trims_name(self):
        assert create_brand("  IBBL ").name == "IBBL"

    def test_empty_name(self):
        with pytest.raises(InvalidBrandName):
            create_brand("   ")

    def test_duplicate(self):
        create_brand("IBBL")
        with pytest.raises(DuplicateBrandError):
            create_brand("IBBL")
        assert Brand.objects.count() == 1

    def test_sorted_by_name(self):
        create_brand("Libell")
        create_brand("Esmaltec")
        assert [b.name for b in get_all_brands()] == ["Esmaltec", "Libell"]
