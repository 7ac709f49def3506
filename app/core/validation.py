from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from app.core.constants import MAX_INT, MONEY_FIELDS
from app.core.dates import normalize_date

CENT = Decimal("0.01")

# Numeric(12, 2) columns hold at most ten integer digits.
MAX_AMOUNT = Decimal("9999999999.99")

MONEY_LABELS = {
    "cost_price": "Cost price",
    "shipping_cost": "Shipping cost",
    "sales_fee": "Sales fee",
    "selling_price": "Selling price",
}


@dataclass
class FormResult:
    """Outcome of validating one submitted form.

    ``values`` holds the cleaned fields that parsed; ``errors`` maps a field
    name to the message shown next to it. The form is accepted only when
    ``errors`` is empty.
    """

    values: dict = field(default_factory=dict)
    errors: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_amount(value: Any) -> Optional[Decimal]:
    """Non-negative amount rounded to cents, or None when invalid."""
    if isinstance(value, bool):
        return None
    text = _text(value)
    if not text:
        return None
    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
        return None
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount_or_zero(value: Any) -> Decimal:
    text = _text(value)
    if not text:
        return Decimal("0")
    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not amount.is_finite() or abs(amount) > MAX_AMOUNT:
        return Decimal("0")
    return amount


def parse_positive_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 < value <= MAX_INT else None
    text = _text(value)
    if not text:
        return None
    try:
        number = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number <= 0 or number > MAX_INT:
        return None
    if number != number.to_integral_value():
        return None
    return int(number)


def validate_product_form(data: Mapping[str, Any]) -> FormResult:
    result = FormResult()

    serial_number = _text(data.get("serial_number"))
    if not serial_number:
        result.errors["serial_number"] = "Serial number is required"
    else:
        result.values["serial_number"] = serial_number

    name = _text(data.get("name"))
    if not name:
        result.errors["name"] = "Product name is required"
    else:
        result.values["name"] = name

    for field_name in MONEY_FIELDS:
        amount = parse_amount(data.get(field_name))
        if amount is None:
            result.errors[field_name] = "{} must be a valid number".format(MONEY_LABELS[field_name])
        else:
            result.values[field_name] = amount

    return result


def validate_sale_form(data: Mapping[str, Any]) -> FormResult:
    result = FormResult()

    product_id = parse_positive_int(data.get("product_id"))
    if product_id is None:
        result.errors["product_id"] = "Please select a product"
    else:
        result.values["product_id"] = product_id

    quantity = parse_positive_int(data.get("quantity_sold"))
    if quantity is None:
        result.errors["quantity_sold"] = "Quantity must be a positive number"
    else:
        result.values["quantity_sold"] = quantity

    sale_date = normalize_date(data.get("date"))
    if sale_date is None:
        result.errors["date"] = "Please select a date"
    else:
        result.values["date"] = sale_date

    return result


__all__ = [
    "FormResult",
    "parse_amount",
    "parse_amount_or_zero",
    "parse_positive_int",
    "validate_product_form",
    "validate_sale_form",
]
