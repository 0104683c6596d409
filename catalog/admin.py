from django.contrib import admin

from .models import Brand, Item, Product, ProductBrand, ProductCompatibility


class ProductBrandInline(admin.TabularInline):
    model = ProductBrand
    extra = 0


class ProductCompatibilityInline(admin.TabularInline):
    model = ProductCompatibility
    fk_name = "part_product"
    extra = 0


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "is_available", "updated_at")
    list_filter = ("is_available",)
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "item", "category", "list_brands")
    list_filter = ("category",)
    search_fields = ("item__name",)
    inlines = [ProductBrandInline, ProductCompatibilityInline]

    def list_brands(self, obj):
        return ", ".join(brand.name for brand in obj.brands.all())

    list_brands.short_description = "Brands"
