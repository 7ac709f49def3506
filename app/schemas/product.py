from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

# Form fields arrive as typed text or JSON numbers; validation happens in
# app.core.validation so every field error is reported at once.
RawAmount = Optional[Union[str, float]]


class ProductForm(BaseModel):
    serial_number: Optional[str] = None
    name: Optional[str] = None
    cost_price: RawAmount = None
    shipping_cost: RawAmount = None
    sales_fee: RawAmount = None
    selling_price: RawAmount = None


class ProfitEstimateRequest(BaseModel):
    cost_price: RawAmount = None
    shipping_cost: RawAmount = None
    sales_fee: RawAmount = None
    selling_price: RawAmount = None


class ProfitEstimateRead(BaseModel):
    estimated_unit_profit: Decimal


class ProductRead(BaseModel):
    id: int
    serial_number: str
    name: str
    cost_price: Decimal
    shipping_cost: Decimal
    sales_fee: Decimal
    selling_price: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductReadWithProfit(ProductRead):
    unit_profit: Decimal
