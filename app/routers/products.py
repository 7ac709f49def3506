from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from app.core.constants import MAX_INT
from app.dependencies import get_db
from app.models.product import Product
from app.schemas.product import (
    ProductForm,
    ProductRead,
    ProductReadWithProfit,
    ProfitEstimateRead,
    ProfitEstimateRequest,
)
from app.services.product_service import (
    create_product,
    delete_product,
    estimate_profit,
    get_product,
    list_products,
    unit_profit,
    update_product,
)

router = APIRouter(prefix="/products", tags=["Products"])


def _to_read(product: Product) -> ProductReadWithProfit:
    base = ProductRead.model_validate(product).model_dump()
    base["unit_profit"] = unit_profit(product)
    return ProductReadWithProfit(**base)


@router.get("", response_model=List[ProductReadWithProfit])
def products_index(
    search: Optional[str] = Query(None, description="Name or serial number contains"),
    db: Session = Depends(get_db),
):
    return [_to_read(product) for product in list_products(db, search=search)]


@router.post("", response_model=ProductReadWithProfit, status_code=status.HTTP_201_CREATED)
def products_create(payload: ProductForm, db: Session = Depends(get_db)):
    return _to_read(create_product(db, payload.model_dump()))


@router.post("/estimate", response_model=ProfitEstimateRead)
def products_estimate(payload: ProfitEstimateRequest):
    return ProfitEstimateRead(estimated_unit_profit=estimate_profit(payload.model_dump()))


@router.get("/{product_id}", response_model=ProductReadWithProfit)
def products_show(
    product_id: int = Path(..., ge=1, le=MAX_INT),
    db: Session = Depends(get_db),
):
    return _to_read(get_product(db, product_id))


@router.put("/{product_id}", response_model=ProductReadWithProfit)
def products_update(
    payload: ProductForm,
    product_id: int = Path(..., ge=1, le=MAX_INT),
    db: Session = Depends(get_db),
):
    return _to_read(update_product(db, product_id, payload.model_dump()))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def products_delete(
    product_id: int = Path(..., ge=1, le=MAX_INT),
    confirm: bool = Query(False, description="Must be true to delete"),
    db: Session = Depends(get_db),
):
    delete_product(db, product_id, confirmed=confirm)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
