from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from app.core.constants import MAX_INT
from app.core.profit import aggregate
from app.dependencies import get_db
from app.models.sale import Sale
from app.schemas.product import ProductRead
from app.schemas.sale import (
    SaleForm,
    SaleListRead,
    SaleRead,
    SaleReadWithProduct,
    SalesSummaryRead,
)
from app.services.sale_service import (
    delete_sale,
    get_sale,
    list_sales,
    product_label,
    record_sale,
)

router = APIRouter(prefix="/sales", tags=["Sales"])


def to_sale_read(sale: Sale) -> SaleReadWithProduct:
    base = SaleRead.model_validate(sale).model_dump()
    base["product_label"] = product_label(sale)
    base["product"] = ProductRead.model_validate(sale.product) if sale.product is not None else None
    return SaleReadWithProduct(**base)


@router.get("", response_model=SaleListRead)
def sales_index(
    date: Optional[str] = Query(None, description="Filter by date (YYYY-MM-DD, partial allowed)"),
    db: Session = Depends(get_db),
):
    sales = list_sales(db, date_filter=date)
    return SaleListRead(
        summary=SalesSummaryRead.model_validate(aggregate(sales)),
        sales=[to_sale_read(sale) for sale in sales],
    )


@router.post("", response_model=SaleReadWithProduct, status_code=status.HTTP_201_CREATED)
def sales_create(payload: SaleForm, db: Session = Depends(get_db)):
    return to_sale_read(record_sale(db, payload.model_dump()))


@router.get("/{sale_id}", response_model=SaleReadWithProduct)
def sales_show(
    sale_id: int = Path(..., ge=1, le=MAX_INT),
    db: Session = Depends(get_db),
):
    return to_sale_read(get_sale(db, sale_id))


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def sales_delete(
    sale_id: int = Path(..., ge=1, le=MAX_INT),
    confirm: bool = Query(False, description="Must be true to delete"),
    db: Session = Depends(get_db),
):
    delete_sale(db, sale_id, confirmed=confirm)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router", "to_sale_read"]
