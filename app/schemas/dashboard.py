from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from app.schemas.sale import SaleReadWithProduct


class DashboardSummary(BaseModel):
    product_count: int
    sale_count: int
    total_revenue: Decimal
    total_profit: Decimal
    recent_sales: List[SaleReadWithProduct] = Field(default_factory=list)
