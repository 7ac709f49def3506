from app.services.dashboard_service import dashboard_summary
from app.services.data_store import DataStore
from app.services.product_service import create_product, list_products
from app.services.sale_service import list_sales, record_sale

__all__ = [
    "DataStore",
    "create_product",
    "dashboard_summary",
    "list_products",
    "list_sales",
    "record_sale",
]
