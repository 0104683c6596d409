from django.conf import settings
from rest_framework import serializers

from .models import Brand, Product, is_parts_category


class BrandSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ["id", "name"]


class ProductSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="item.id", read_only=True)
    productId = serializers.IntegerField(source="id", read_only=True)
    name = serializers.CharField(source="item.name", read_only=True)
    price = serializers.FloatField(source="item.price", read_only=True)
    image = serializers.CharField(source="item.image", read_only=True)
    isAvailable = serializers.BooleanField(source="item.is_available", read_only=True)
    brandIds = serializers.SerializerMethodField()
    fitsProductIds = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "productId",
            "name",
            "price",
            "image",
            "category",
            "isAvailable",
            "brandIds",
            "fitsProductIds",
        ]

    def get_brandIds(self, obj):
        return getattr(obj, "brand_ids", [])

    def get_fitsProductIds(self, obj):
        return getattr(obj, "fits_product_ids", [])


class IdListField(serializers.ListField):
    """Multi-value form field of integer ids; blank entries are skipped."""

    child = serializers.CharField(allow_blank=True)

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        ids = []
        for value in values:
            if value == "":
                continue
            try:
                ids.append(int(value))
            except (TypeError, ValueError):
                raise serializers.ValidationError("Invalid id list")
        return ids


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    category = serializers.ChoiceField(choices=Product.CATEGORY_CHOICES)
    is_available = serializers.BooleanField(default=False)
    brand_ids = IdListField(required=False, default=list)
    fits_product_ids = IdListField(required=False, default=list)
    image = serializers.FileField(required=False)
    current_image = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_image(self, value):
        if value.size > settings.MAX_UPLOAD_SIZE:
            raise serializers.ValidationError(
                "file size exceeds maximum allowed size of 5MB"
            )
        return value

    def validate(self, data):
        if data.get("fits_product_ids") and not is_parts_category(data["category"]):
            raise serializers.ValidationError(
                "Compatibility is only allowed for refis or pecas"
            )
        return data
