from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from app.config import Settings, get_settings
from app.core.constants import DEFAULT_DASHBOARD_PATH, TEMPLATES_DIR
from app.core.errors import AppException, app_exception_handler
from app.core.logging import setup_logging
from app.database import init_db
from app.routers import (
    dashboard_router,
    health_router,
    products_router,
    sales_router,
)


setup_logging()
settings: Settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
app.add_exception_handler(AppException, app_exception_handler)

app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(products_router)
app.include_router(sales_router)


@app.get("/")
def root():
    return RedirectResponse(url=DEFAULT_DASHBOARD_PATH, status_code=302)


__all__ = ["app", "root"]
