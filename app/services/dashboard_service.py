from typing import Optional

from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.constants import TABLE_PRODUCTS, TABLE_SALES
from app.core.profit import aggregate
from app.services.data_store import DataStore
from app.services.sale_service import list_sales


def dashboard_summary(db: Session, recent_limit: Optional[int] = None) -> dict:
    if recent_limit is None:
        recent_limit = get_settings().RECENT_SALES_LIMIT

    store = DataStore(db)
    totals = aggregate(store.list(TABLE_SALES))

    return {
        "product_count": store.count(TABLE_PRODUCTS),
        "sale_count": totals.count,
        "total_revenue": totals.total_revenue,
        "total_profit": totals.total_profit,
        "recent_sales": list_sales(db, limit=recent_limit),
    }
