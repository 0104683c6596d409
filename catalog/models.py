from django.db import models

# Item id of the installation service; it can not be deleted from the back office.
INSTALLATION_SERVICE_ID = 1

PARTS_CATEGORIES = ("refis", "pecas")


class Brand(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Item(models.Model):
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image = models.CharField(max_length=500, blank=True)
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


class Product(models.Model):
    CATEGORY_CHOICES = [
        ("bebedouros", "Bebedouros"),
        ("purificadores", "Purificadores"),
        ("refis", "Refis"),
        ("pecas", "Peças"),
    ]

    item = models.OneToOneField(Item, on_delete=models.CASCADE, related_name="product")
    category = models.CharField(max_length=50, choices=CATEGORY_CHOICES)
    brands = models.ManyToManyField(
        Brand, through="ProductBrand", related_name="products", blank=True
    )
    fits = models.ManyToManyField(
        "self",
        through="ProductCompatibility",
        through_fields=("part_product", "fits_product"),
        symmetrical=False,
        related_name="compatible_parts",
        blank=True,
    )

    def __str__(self):
        return f"{self.item.name} ({self.category})"

    @property
    def is_part(self):
        return is_parts_category(self.category)


class ProductBrand(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE)
    brand = models.ForeignKey(Brand, on_delete=models.CASCADE)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["product", "brand"], name="unique_product_brand"
            )
        ]


class ProductCompatibility(models.Model):
    part_product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="fits_links"
    )
    fits_product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="part_links"
    )

    class Meta:
        verbose_name_plural = "product compatibilities"
        constraints = [
            models.UniqueConstraint(
                fields=["part_product", "fits_product"],
                name="unique_product_compatibility",
            )
        ]

    def __str__(self):
        return f"{self.part_product} -> {self.fits_product}"


def is_parts_category(category):
    return category in PARTS_CATEGORIES
