from app.models.product import Product
from app.models.sale import Sale

__all__ = ["Product", "Sale"]
