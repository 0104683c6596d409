import logging

from django.db import transaction

from catalog.exceptions import (
    BrandNotFound,
    CompatibilityError,
    ProductNotFound,
    ProtectedProductError,
)
from catalog.models import (
    INSTALLATION_SERVICE_ID,
    Brand,
    Item,
    Product,
    ProductBrand,
    ProductCompatibility,
    is_parts_category,
)

logger = logging.getLogger(__name__)


def _product_queryset():
    return Product.objects.select_related("item")


def get_all_products():
    """All catalog products, newest item first."""
    return list(_product_queryset().order_by("-item_id"))


def get_products_by_category(category):
    if not category:
        return get_all_products()
    return list(_product_queryset().filter(category=category).order_by("-item_id"))


def get_product_by_id(item_id):
    """Look a product up by its item id, with brand and compatibility ids attached."""
    try:
        product = _product_queryset().get(item_id=item_id)
    except Product.DoesNotExist:
        raise ProductNotFound(item_id)

    product.brand_ids = list(
        ProductBrand.objects.filter(product=product)
        .order_by("brand_id")
        .values_list("brand_id", flat=True)
    )
    product.fits_product_ids = list(
        ProductCompatibility.objects.filter(part_product=product)
        .order_by("fits_product_id")
        .values_list("fits_product_id", flat=True)
    )
    return product


def get_all_product_options():
    """(product id, name) pairs used to pick compatible products."""
    return list(
        Product.objects.select_related("item")
        .order_by("item__name")
        .values("id", "item__name")
    )


def unique_ids(ids):
    seen = set()
    unique = []
    for value in ids:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def create_product(
    name, price, image, category, is_available, brand_ids=(), fits_product_ids=()
):
    with transaction.atomic():
        item = Item.objects.create(
            name=name, price=price, image=image, is_available=is_available
        )
        product = Product.objects.create(item=item, category=category)

        _insert_product_brands(product, brand_ids)
        _insert_product_compatibility(product, category, fits_product_ids)

    logger.info(f"[Catalog] Created product {product.id} (item {item.id})")
    product.brand_ids = unique_ids(brand_ids)
    product.fits_product_ids = unique_ids(fits_product_ids)
    return product


def update_product(
    item_id,
    name,
    price,
    image,
    category,
    is_available,
    brand_ids=(),
    fits_product_ids=(),
):
    with transaction.atomic():
        item = Item.objects.select_for_update().filter(id=item_id).first()
        if item is None:
            raise ProductNotFound(item_id)

        item.name = name
        item.price = price
        item.image = image
        item.is_available = is_available
        item.save()

        try:
            product = Product.objects.select_for_update().get(item_id=item_id)
        except Product.DoesNotExist:
            raise ProductNotFound(item_id)

        product.category = category
        product.save(update_fields=["category"])

        ProductBrand.objects.filter(product=product).delete()
        _insert_product_brands(product, brand_ids)

        ProductCompatibility.objects.filter(part_product=product).delete()
        _insert_product_compatibility(product, category, fits_product_ids)

    logger.info(f"[Catalog] Updated product {product.id} (item {item_id})")
    return product


def delete_product(item_id):
    if item_id == INSTALLATION_SERVICE_ID:
        raise ProtectedProductError()

    with transaction.atomic():
        product = Product.objects.filter(item_id=item_id).first()
        if product is None:
            raise ProductNotFound(item_id)

        ProductBrand.objects.filter(product=product).delete()
        ProductCompatibility.objects.filter(part_product=product).delete()
        ProductCompatibility.objects.filter(fits_product=product).delete()
        product.delete()
        Item.objects.filter(id=item_id).delete()

    logger.info(f"[Catalog] Deleted item {item_id}")


def _insert_product_brands(product, brand_ids):
    ids = [brand_id for brand_id in unique_ids(brand_ids) if brand_id]
    if not ids:
        return

    existing = set(Brand.objects.filter(id__in=ids).values_list("id", flat=True))
    for brand_id in ids:
        if brand_id not in existing:
            raise BrandNotFound(brand_id)
        ProductBrand.objects.create(product=product, brand_id=brand_id)


def _insert_product_compatibility(product, category, fits_product_ids):
    if not fits_product_ids:
        return
    if not is_parts_category(category):
        raise CompatibilityError(
            "apenas produtos das categorias refis ou pecas podem ter compatibilidade"
        )

    ids = [fits_id for fits_id in unique_ids(fits_product_ids) if fits_id]
    existing = set(Product.objects.filter(id__in=ids).values_list("id", flat=True))
    for fits_id in ids:
        if fits_id == product.id:
            raise CompatibilityError("produto nao pode ser compativel consigo mesmo")
        if fits_id not in existing:
            raise CompatibilityError(f"produto compativel {fits_id} nao encontrado")
        ProductCompatibility.objects.create(part_product=product, fits_product_id=fits_id)
