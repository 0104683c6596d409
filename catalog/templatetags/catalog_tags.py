from django import template

from catalog.models import Product

register = template.Library()

CATEGORY_LABELS = dict(Product.CATEGORY_CHOICES)


@register.filter
def format_category(category):
    return CATEGORY_LABELS.get(category, category)


@register.filter
def brl(value):
    """Format a number as Brazilian reais, e.g. 1234.5 -> R$ 1.234,50."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return value
    formatted = f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {formatted}"


@register.filter
def contains(collection, value):
    return value in (collection or ())
