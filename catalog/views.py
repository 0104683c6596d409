import logging

from django.http import Http404, HttpResponse
from django.shortcuts import render
from django.views.decorators.http import require_GET
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from storefront.negotiation import negotiated_response, renders_fragment

from .exceptions import ProductNotFound
from .models import Product
from .serializers import BrandSerializer, ProductSerializer, ProductWriteSerializer
from .services.brand_service import create_brand, get_all_brands
from .services.product_service import (
    create_product,
    delete_product,
    get_all_product_options,
    get_all_products,
    get_product_by_id,
    get_products_by_category,
    update_product,
)
from .uploads import delete_product_image, save_product_image

logger = logging.getLogger(__name__)

PUBLIC_CATEGORIES = {key for key, _ in Product.CATEGORY_CHOICES}


@require_GET
def category_products(request, category):
    if category not in PUBLIC_CATEGORIES:
        raise Http404("Categoria não encontrada")
    return _render_product_cards(request, get_products_by_category(category))


@require_GET
def all_products(request):
    return _render_product_cards(request, get_all_products())


def _render_product_cards(request, products):
    if not products:
        return render(request, "catalog/product-empty-state.html")
    return render(request, "catalog/product-cards.html", {"products": products})


def _error_response(request, message, status_code, data=None):
    """htmx callers get an inline error fragment; API callers get the status code."""
    if renders_fragment(request):
        return Response(
            {"message": message},
            template_name="catalog/admin-error-message.html",
        )
    return Response(
        {"error": message} if data is None else data, status=status_code
    )


def _first_error(errors):
    for field, messages in errors.items():
        message = messages[0] if isinstance(messages, list) else messages
        if field == "non_field_errors":
            return str(message)
        return f"{field}: {message}"
    return "Dados inválidos"


class AdminProductListView(APIView):
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request):
        products = get_all_products()
        return negotiated_response(
            request,
            ProductSerializer(products, many=True).data,
            "catalog/admin-product-list.html",
            context={"products": products},
        )

    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(
                request,
                _first_error(serializer.errors),
                status.HTTP_400_BAD_REQUEST,
                data=serializer.errors,
            )

        data = serializer.validated_data
        upload = data.get("image")
        if upload is None:
            return _error_response(
                request, "Image upload failed: no file", status.HTTP_400_BAD_REQUEST
            )

        try:
            image_path = save_product_image(upload)
        except ValueError as e:
            return _error_response(
                request, f"Image upload failed: {e}", status.HTTP_400_BAD_REQUEST
            )

        try:
            product = create_product(
                data["name"],
                data["price"],
                image_path,
                data["category"],
                data["is_available"],
                data["brand_ids"],
                data["fits_product_ids"],
            )
        except ValueError as e:
            delete_product_image(image_path)
            return _error_response(request, str(e), status.HTTP_400_BAD_REQUEST)
        except Exception as e:
            delete_product_image(image_path)
            logger.exception(f"[Catalog] Failed to create product: {e}")
            return _error_response(
                request, "Erro ao salvar produto", status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return negotiated_response(
            request,
            ProductSerializer(product).data,
            "catalog/admin-product-card.html",
            context={"product": product},
            status=status.HTTP_201_CREATED,
        )


class AdminProductDetailView(APIView):
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def put(self, request, item_id):
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(
                request,
                _first_error(serializer.errors),
                status.HTTP_400_BAD_REQUEST,
                data=serializer.errors,
            )

        data = serializer.validated_data
        current_image = data["current_image"]
        image_path = current_image
        upload = data.get("image")
        if upload is not None:
            try:
                image_path = save_product_image(upload)
            except ValueError as e:
                return _error_response(
                    request, f"Image upload failed: {e}", status.HTTP_400_BAD_REQUEST
                )

        try:
            update_product(
                item_id,
                data["name"],
                data["price"],
                image_path,
                data["category"],
                data["is_available"],
                data["brand_ids"],
                data["fits_product_ids"],
            )
        except ProductNotFound as e:
            if upload is not None:
                delete_product_image(image_path)
            return _error_response(request, str(e), status.HTTP_404_NOT_FOUND)
        except ValueError as e:
            if upload is not None:
                delete_product_image(image_path)
            return _error_response(request, str(e), status.HTTP_400_BAD_REQUEST)

        if upload is not None:
            delete_product_image(current_image)

        if not renders_fragment(request):
            return Response({"message": "Product updated successfully"})

        product = get_product_by_id(item_id)
        return Response(
            {"product": product},
            template_name="catalog/admin-product-card.html",
            headers={"HX-Trigger": "closeEditModal"},
        )

    def delete(self, request, item_id):
        try:
            image = get_product_by_id(item_id).item.image
        except ProductNotFound:
            image = ""

        try:
            delete_product(item_id)
        except ProductNotFound as e:
            return _error_response(request, str(e), status.HTTP_404_NOT_FOUND)
        except ValueError as e:
            return _error_response(request, str(e), status.HTTP_400_BAD_REQUEST)

        delete_product_image(image)

        if renders_fragment(request):
            # htmx removes the card from the page
            return HttpResponse(status=status.HTTP_200_OK)
        return Response({"message": "Product deleted successfully"})


class AdminBrandListView(APIView):
    parser_classes = [FormParser, MultiPartParser, JSONParser]

    def post(self, request):
        name = request.data.get("name", "")
        try:
            brand = create_brand(name)
        except ValueError as e:
            if renders_fragment(request):
                return Response(
                    {"name": name, "error": str(e)},
                    status=status.HTTP_400_BAD_REQUEST,
                    template_name="catalog/admin-brand-modal.html",
                )
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        if renders_fragment(request):
            return HttpResponse(
                status=status.HTTP_204_NO_CONTENT,
                headers={"HX-Trigger": "refreshBrands,closeBrandModal"},
            )
        return Response(BrandSerializer(brand).data, status=status.HTTP_201_CREATED)


@require_GET
def brand_options(request):
    return render(
        request, "catalog/admin-brand-options.html", {"brands": get_all_brands()}
    )


@require_GET
def brand_modal(request):
    return render(request, "catalog/admin-brand-modal.html", {"name": "", "error": ""})


@require_GET
def product_edit_form(request, item_id):
    try:
        product = get_product_by_id(item_id)
    except ProductNotFound as e:
        raise Http404(str(e))

    options = [
        option for option in get_all_product_options() if option["id"] != product.id
    ]
    return render(
        request,
        "catalog/admin-edit-form.html",
        {
            "product": product,
            "brands": get_all_brands(),
            "product_options": options,
            "brand_selections": set(product.brand_ids),
            "fit_selections": set(product.fits_product_ids),
        },
    )
