"""Checkout form validation.

Every validator trims its input, checks that it is present and then checks
its format. ``validate_checkout_form`` runs all of them and collects every
error in order; callers usually only show the first one.
"""

import json
import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .serializers import CartItemSerializer

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CEP_RE = re.compile(r"^\d{5}-?\d{3}$")
CVV_RE = re.compile(r"^\d{3,4}$")
EXPIRY_RE = re.compile(r"^\d{2}/\d{2}$")
NON_DIGIT_RE = re.compile(r"\D")
WHITESPACE_RE = re.compile(r"\s")

# Deliveries are only made inside this city.
DELIVERY_CITY = "campo grande"
DELIVERY_STATE = "MS"

# Column sizes of the order table.
MAX_EMAIL_LENGTH = 254
MAX_PHONE_LENGTH = 30
MAX_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 255
MAX_NEIGHBORHOOD_LENGTH = 100
MAX_APARTMENT_LENGTH = 100
MAX_CPF_LENGTH = 18

PAYMENT_CREDIT_CARD = "credit_card"
PAYMENT_BOLETO = "boleto"
PAYMENT_PIX = "pix"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[FieldError] = field(default_factory=list)

    @property
    def first_error(self) -> Optional[FieldError]:
        return self.errors[0] if self.errors else None


@dataclass
class CartItem:
    id: int
    name: str
    price: float
    quantity: int


@dataclass
class CheckoutForm:
    email: str = ""
    phone: str = ""
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    apartment: str = ""
    payment_method: str = ""
    card_name: str = ""
    card_number: str = ""
    expiry: str = ""
    cvv: str = ""
    cpf: str = ""
    pix_key: str = ""
    cart_items: List[CartItem] = field(default_factory=list)

    @classmethod
    def from_post(cls, data):
        """Build a form from checkout POST data; ``cart_items`` is a JSON array.

        Raises ``ValueError`` if the cart payload can not be decoded.
        """
        form = cls(
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            address=data.get("address", ""),
            neighborhood=data.get("neighborhood", ""),
            city=data.get("city", ""),
            state=data.get("state", ""),
            zip_code=data.get("zipCode", ""),
            apartment=data.get("apartment", ""),
            payment_method=data.get("paymentMethod", ""),
            card_name=data.get("cardName", ""),
            card_number=data.get("cardNumber", ""),
            expiry=data.get("expiry", ""),
            cvv=data.get("cvv", ""),
            cpf=data.get("cpf", ""),
            pix_key=data.get("pixKey", ""),
        )

        cart_data = data.get("cart_items", "")
        if cart_data:
            try:
                lines = json.loads(cart_data)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid cart data: {e}")

            serializer = CartItemSerializer(data=lines, many=True)
            if not serializer.is_valid():
                raise ValueError(f"Invalid cart data: {serializer.errors}")
            form.cart_items = [CartItem(**line) for line in serializer.validated_data]
        return form


def validate_email(email):
    email = (email or "").strip()
    if not email:
        return FieldError("email", "Email é obrigatório")
    if len(email) > MAX_EMAIL_LENGTH or not EMAIL_RE.match(email):
        return FieldError("email", "Por favor, insira um email válido")
    return None


def validate_phone(phone):
    phone = (phone or "").strip()
    if not phone:
        return FieldError("phone", "Telefone é obrigatório")
    if len(phone) > MAX_PHONE_LENGTH or len(NON_DIGIT_RE.sub("", phone)) < 10:
        return FieldError("phone", "Por favor, insira um telefone válido")
    return None


def validate_name(name, field_name):
    name = (name or "").strip()
    if field_name == "firstName":
        label = "Nome"
    else:
        field_name, label = "lastName", "Sobrenome"

    if not name:
        return FieldError(field_name, f"{label} é obrigatório")
    if len(name) < 2:
        return FieldError(field_name, f"{label} deve ter pelo menos 2 caracteres")
    if len(name) > MAX_NAME_LENGTH:
        return FieldError(
            field_name, f"{label} deve ter no máximo {MAX_NAME_LENGTH} caracteres"
        )
    return None


def is_delivery_area(city, state):
    return (city or "").strip().lower() == DELIVERY_CITY and (
        state or ""
    ).strip().upper() == DELIVERY_STATE


def validate_address(address, neighborhood, city, state, zip_code, apartment=""):
    errors = []

    address = (address or "").strip()
    neighborhood = (neighborhood or "").strip()
    if not address:
        errors.append(FieldError("address", "Endereço é obrigatório"))
    elif len(address) > MAX_ADDRESS_LENGTH:
        errors.append(FieldError("address", "Endereço muito longo"))
    if not neighborhood:
        errors.append(FieldError("neighborhood", "Bairro é obrigatório"))
    elif len(neighborhood) > MAX_NEIGHBORHOOD_LENGTH:
        errors.append(FieldError("neighborhood", "Bairro muito longo"))
    if not (city or "").strip():
        errors.append(FieldError("city", "Cidade é obrigatória"))
    if not (state or "").strip():
        errors.append(FieldError("state", "Estado é obrigatório"))

    if not is_delivery_area(city, state):
        errors.append(
            FieldError("city", "Atendemos apenas clientes em Campo Grande, MS")
        )

    zip_code = (zip_code or "").strip()
    if not zip_code:
        errors.append(FieldError("zipCode", "CEP é obrigatório"))
    elif not CEP_RE.match(zip_code):
        errors.append(FieldError("zipCode", "Por favor, insira um CEP válido"))

    if len((apartment or "").strip()) > MAX_APARTMENT_LENGTH:
        errors.append(FieldError("apartment", "Complemento muito longo"))

    return errors


def luhn_check(card_number):
    digits = NON_DIGIT_RE.sub("", card_number or "")
    if len(digits) < 13 or len(digits) > 19:
        return False

    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def validate_expiry(expiry, today=None):
    """Accept ``MM/YY`` dates in the current month or later."""
    if not EXPIRY_RE.match(expiry or ""):
        return False

    month_text, year_text = expiry.split("/")
    month = int(month_text)
    year = 2000 + int(year_text)
    if month < 1 or month > 12:
        return False

    today = today or date.today()
    if year < today.year:
        return False
    if year == today.year and month < today.month:
        return False
    return True


def validate_credit_card(card_name, card_number, expiry, cvv, today=None):
    errors = []

    if not (card_name or "").strip():
        errors.append(FieldError("cardName", "Nome no cartão é obrigatório"))

    card_number = (card_number or "").strip()
    if not card_number:
        errors.append(FieldError("cardNumber", "Número do cartão é obrigatório"))
    elif not luhn_check(WHITESPACE_RE.sub("", card_number)):
        errors.append(
            FieldError("cardNumber", "Por favor, insira um número de cartão válido")
        )

    expiry = (expiry or "").strip()
    if not expiry:
        errors.append(FieldError("expiry", "Data de validade é obrigatória"))
    elif not validate_expiry(expiry, today=today):
        errors.append(
            FieldError("expiry", "Por favor, insira uma data de validade válida")
        )

    cvv = (cvv or "").strip()
    if not cvv:
        errors.append(FieldError("cvv", "CVV é obrigatório"))
    elif not CVV_RE.match(cvv):
        errors.append(FieldError("cvv", "Por favor, insira um CVV válido"))

    return errors


def validate_cpf(cpf):
    """CPF (11 digits) or CNPJ (14 digits); check digits are not verified."""
    cpf = (cpf or "").strip()
    if not cpf:
        return FieldError("cpf", "CPF/CNPJ é obrigatório")
    if len(cpf) > MAX_CPF_LENGTH or len(NON_DIGIT_RE.sub("", cpf)) not in (11, 14):
        return FieldError("cpf", "Por favor, insira um CPF ou CNPJ válido")
    return None


def validate_pix_key(pix_key):
    pix_key = (pix_key or "").strip()
    if not pix_key:
        return FieldError("pixKey", "Chave PIX é obrigatória")
    if len(pix_key) < 5:
        return FieldError("pixKey", "Chave PIX inválida")
    return None


def validate_checkout_form(form, today=None):
    errors = []

    def add(error):
        if error is not None:
            errors.append(error)

    add(validate_email(form.email))
    add(validate_phone(form.phone))
    add(validate_name(form.first_name, "firstName"))
    add(validate_name(form.last_name, "lastName"))
    errors.extend(
        validate_address(
            form.address,
            form.neighborhood,
            form.city,
            form.state,
            form.zip_code,
            apartment=form.apartment,
        )
    )

    if form.payment_method == PAYMENT_CREDIT_CARD:
        errors.extend(
            validate_credit_card(
                form.card_name, form.card_number, form.expiry, form.cvv, today=today
            )
        )
    elif form.payment_method == PAYMENT_BOLETO:
        add(validate_cpf(form.cpf))
    elif form.payment_method == PAYMENT_PIX:
        add(validate_pix_key(form.pix_key))

    if not form.cart_items:
        errors.append(FieldError("cart", "Seu carrinho está vazio"))

    return ValidationResult(is_valid=not errors, errors=errors)
