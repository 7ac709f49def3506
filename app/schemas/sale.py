from datetime import date as date_type, datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.product import ProductRead


def _today_iso() -> str:
    return date_type.today().isoformat()


class SaleForm(BaseModel):
    product_id: Optional[Union[int, str]] = None
    quantity_sold: Optional[Union[int, str]] = "1"
    date: Optional[str] = Field(default_factory=_today_iso)


class SaleRead(BaseModel):
    id: int
    product_id: int
    quantity_sold: int
    date: date_type
    total_revenue: Decimal
    profit: Decimal
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SaleReadWithProduct(SaleRead):
    product_label: str
    product: Optional[ProductRead] = None


class SalesSummaryRead(BaseModel):
    total_revenue: Decimal
    total_profit: Decimal
    count: int

    model_config = ConfigDict(from_attributes=True)


class SaleListRead(BaseModel):
    summary: SalesSummaryRead
    sales: List[SaleReadWithProduct] = Field(default_factory=list)
