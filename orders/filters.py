import django_filters

from .models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(field_name="status", lookup_expr="exact")
    payment_status = django_filters.CharFilter(
        field_name="payment_status", lookup_expr="exact"
    )

    class Meta:
        model = Order
        fields = ["status", "payment_status"]
