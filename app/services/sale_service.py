import logging
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.constants import TABLE_PRODUCTS, TABLE_SALES
from app.core.errors import AppException, ErrorType
from app.core.profit import compute_sale
from app.core.validation import validate_sale_form
from app.models.sale import Sale
from app.services.data_store import DataStore

logger = logging.getLogger(__name__)


def product_label(sale: Sale) -> str:
    if sale.product is not None:
        return sale.product.name
    return "Product ID: {}".format(sale.product_id)


def list_sales(
    db: Session,
    date_filter: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[Sale]:
    date_filter = (date_filter or "").strip()
    store = DataStore(db)
    if not date_filter:
        return store.list(TABLE_SALES, order_by="date", descending=True, limit=limit)

    # Substring match on the ISO date runs in Python, so the limit follows it.
    sales = store.list(TABLE_SALES, order_by="date", descending=True)
    matching = [sale for sale in sales if date_filter in sale.date.isoformat()]
    return matching if limit is None else matching[:limit]


def get_sale(db: Session, sale_id: int) -> Sale:
    sale = DataStore(db).get(TABLE_SALES, sale_id)
    if sale is None:
        raise AppException(ErrorType.NOT_FOUND, "Sale not found.")
    return sale


def record_sale(db: Session, data: Mapping[str, Any]) -> Sale:
    result = validate_sale_form(data)
    if not result.ok:
        raise AppException(
            ErrorType.VALIDATION,
            "Sale form has invalid fields.",
            errors=result.errors,
        )

    store = DataStore(db)
    values = result.values
    product = store.get(TABLE_PRODUCTS, values["product_id"])
    if product is None:
        logger.warning(
            "Recording sale for unknown product %s with zero revenue and profit.",
            values["product_id"],
            extra={"table": TABLE_SALES, "product_id": values["product_id"]},
        )

    sale_values = compute_sale(product, values["quantity_sold"])
    sale = store.insert(
        TABLE_SALES,
        {
            "product_id": values["product_id"],
            "quantity_sold": values["quantity_sold"],
            "date": values["date"],
            "total_revenue": sale_values.total_revenue,
            "profit": sale_values.profit,
        },
    )
    logger.info(
        "Recorded sale %s: product=%s qty=%s revenue=%s profit=%s",
        sale.id,
        sale.product_id,
        sale.quantity_sold,
        sale_values.total_revenue,
        sale_values.profit,
        extra={
            "table": TABLE_SALES,
            "row_id": sale.id,
            "product_id": sale.product_id,
            "quantity_sold": sale.quantity_sold,
            "total_revenue": sale_values.total_revenue,
            "profit": sale_values.profit,
        },
    )
    return sale


def delete_sale(db: Session, sale_id: int, *, confirmed: bool) -> None:
    if not confirmed:
        raise AppException(
            ErrorType.CONFIRMATION_REQUIRED,
            "Are you sure you want to delete this sale? Repeat with confirm=true.",
        )
    DataStore(db).delete(TABLE_SALES, sale_id)
