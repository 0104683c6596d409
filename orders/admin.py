from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product_id", "product_name", "quantity", "unit_price", "total_price")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_number",
        "customer_name",
        "payment_method",
        "payment_status",
        "status",
        "total_amount",
        "created_at",
    )
    list_filter = ("payment_status", "status", "payment_method")
    search_fields = ("order_number", "email", "first_name", "last_name")
    readonly_fields = ("order_number", "stripe_payment_id", "created_at", "updated_at")
    inlines = [OrderItemInline]
