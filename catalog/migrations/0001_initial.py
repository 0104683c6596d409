import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Brand",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=100, unique=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Item",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("image", models.CharField(blank=True, max_length=500)),
                ("is_available", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("bebedouros", "Bebedouros"),
                            ("purificadores", "Purificadores"),
                            ("refis", "Refis"),
                            ("pecas", "Peças"),
                        ],
                        max_length=50,
                    ),
                ),
                (
                    "item",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="product",
                        to="catalog.item",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="ProductBrand",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "brand",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="catalog.brand",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("product", "brand"), name="unique_product_brand"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductCompatibility",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "fits_product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="part_links",
                        to="catalog.product",
                    ),
                ),
                (
                    "part_product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fits_links",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "product compatibilities",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("part_product", "fits_product"),
                        name="unique_product_compatibility",
                    )
                ],
            },
        ),
        migrations.AddField(
            model_name="product",
            name="brands",
            field=models.ManyToManyField(
                blank=True,
                related_name="products",
                through="catalog.ProductBrand",
                to="catalog.brand",
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="fits",
            field=models.ManyToManyField(
                blank=True,
                related_name="compatible_parts",
                through="catalog.ProductCompatibility",
                through_fields=("part_product", "fits_product"),
                to="catalog.product",
            ),
        ),
    ]
