import logging

from django.db import IntegrityError, transaction

from catalog.exceptions import DuplicateBrandError, InvalidBrandName
from catalog.models import Brand

logger = logging.getLogger(__name__)


def get_all_brands():
    return list(Brand.objects.order_by("name"))


def create_brand(name):
    trimmed = (name or "").strip()
    if not trimmed:
        raise InvalidBrandName()

    try:
        with transaction.atomic():
            brand = Brand.objects.create(name=trimmed)
    except IntegrityError:
        raise DuplicateBrandError()

    logger.info(f"[Catalog] Created brand {brand.id} ({brand.name})")
    return brand
