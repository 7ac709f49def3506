import logging
from decimal import Decimal
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.constants import MONEY_FIELDS, TABLE_PRODUCTS
from app.core.errors import AppException, ErrorType
from app.core.profit import estimated_unit_profit
from app.core.validation import parse_amount_or_zero, validate_product_form
from app.models.product import Product
from app.services.data_store import DataStore

logger = logging.getLogger(__name__)


def _matches(product: Product, search: str) -> bool:
    needle = search.lower()
    return needle in (product.name or "").lower() or needle in (product.serial_number or "").lower()


def _validated(data: Mapping[str, Any]) -> dict:
    result = validate_product_form(data)
    if not result.ok:
        raise AppException(
            ErrorType.VALIDATION,
            "Product form has invalid fields.",
            errors=result.errors,
        )
    return result.values


def unit_profit(product: Product) -> Decimal:
    return estimated_unit_profit(
        product.cost_price,
        product.shipping_cost,
        product.sales_fee,
        product.selling_price,
    )


def list_products(db: Session, search: Optional[str] = None) -> list[Product]:
    products = DataStore(db).list(TABLE_PRODUCTS, order_by="name")
    search = (search or "").strip()
    if not search:
        return products
    return [product for product in products if _matches(product, search)]


def get_product(db: Session, product_id: int) -> Product:
    product = DataStore(db).get(TABLE_PRODUCTS, product_id)
    if product is None:
        raise AppException(ErrorType.NOT_FOUND, "Product not found.")
    return product


def create_product(db: Session, data: Mapping[str, Any]) -> Product:
    values = _validated(data)
    product = DataStore(db).insert(TABLE_PRODUCTS, values)
    logger.info(
        "Created product %s (%s)",
        product.id,
        product.serial_number,
        extra={"table": TABLE_PRODUCTS, "row_id": product.id},
    )
    return product


def update_product(db: Session, product_id: int, data: Mapping[str, Any]) -> Product:
    """Replace every editable field of a product.

    Sales already recorded against the product keep their stored revenue
    and profit.
    """
    values = _validated(data)
    return DataStore(db).update(TABLE_PRODUCTS, product_id, values)


def delete_product(db: Session, product_id: int, *, confirmed: bool) -> None:
    if not confirmed:
        raise AppException(
            ErrorType.CONFIRMATION_REQUIRED,
            "Are you sure you want to delete this product? Repeat with confirm=true.",
        )
    DataStore(db).delete(TABLE_PRODUCTS, product_id)


def estimate_profit(data: Mapping[str, Any]) -> Decimal:
    amounts = {name: parse_amount_or_zero(data.get(name)) for name in MONEY_FIELDS}
    return estimated_unit_profit(**amounts)
