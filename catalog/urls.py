from django.urls import path

from staff.auth import BACK_OFFICE_ROLES, require_role

from . import views

back_office = require_role(*BACK_OFFICE_ROLES)

urlpatterns = [
    path("products/all/", views.all_products, name="products-all"),
    path("products/<slug:category>/", views.category_products, name="products-by-category"),
    path(
        "admin/brands/new/",
        back_office(views.brand_modal),
        name="admin-brand-modal",
    ),
    path(
        "admin/products/<int:item_id>/edit/",
        back_office(views.product_edit_form),
        name="admin-product-edit",
    ),
    path(
        "api/admin/products/",
        back_office(views.AdminProductListView.as_view()),
        name="admin-api-products",
    ),
    path(
        "api/admin/products/<int:item_id>/",
        back_office(views.AdminProductDetailView.as_view()),
        name="admin-api-product-detail",
    ),
    path(
        "api/admin/brands/",
        back_office(views.AdminBrandListView.as_view()),
        name="admin-api-brands",
    ),
    path(
        "api/admin/brands/options/",
        back_office(views.brand_options),
        name="admin-api-brand-options",
    ),
]
