from app.routers.dashboard import router as dashboard_router
from app.routers.health import router as health_router
from app.routers.products import router as products_router
from app.routers.sales import router as sales_router

__all__ = [
    "dashboard_router",
    "health_router",
    "products_router",
    "sales_router",
]
