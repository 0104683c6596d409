from rest_framework import serializers

from .models import Order, OrderItem

FINANCIAL_FIELDS = ("total_amount", "unit_price", "total_price", "stripe_payment_id")


class FinancialFieldsMixin:
    """Drop monetary fields unless the serializer context allows them."""

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not self.context.get("can_view_financial_data", False):
            for name in FINANCIAL_FIELDS:
                data.pop(name, None)
        return data


class OrderItemSerializer(FinancialFieldsMixin, serializers.ModelSerializer):
    unit_price = serializers.FloatField()
    total_price = serializers.FloatField()

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "order_id",
            "product_id",
            "product_name",
            "quantity",
            "unit_price",
            "total_price",
            "created_at",
        ]


class OrderSerializer(FinancialFieldsMixin, serializers.ModelSerializer):
    total_amount = serializers.FloatField()

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "email",
            "phone",
            "first_name",
            "last_name",
            "address",
            "neighborhood",
            "city",
            "state",
            "zip_code",
            "apartment",
            "payment_method",
            "payment_status",
            "stripe_payment_id",
            "total_amount",
            "status",
            "created_at",
            "updated_at",
        ]


class StrictIntegerField(serializers.IntegerField):
    """Integer field that refuses strings, booleans and floats instead of coercing them."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        return super().to_internal_value(data)


class StrictFloatField(serializers.FloatField):
    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        return super().to_internal_value(data)


class CartItemSerializer(serializers.Serializer):
    """One line of the JSON cart posted by the storefront checkout form."""

    id = StrictIntegerField(required=False, default=0)
    name = serializers.CharField(required=False, default="", allow_blank=True, trim_whitespace=False)
    price = StrictFloatField(required=False, default=0.0)
    quantity = StrictIntegerField(required=False, default=0)
