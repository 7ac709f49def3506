from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from app.config import get_settings
from app.dependencies import get_db
from app.routers.sales import to_sale_read
from app.schemas.dashboard import DashboardSummary
from app.services.dashboard_service import dashboard_summary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def _summary(db: Session) -> DashboardSummary:
    data = dashboard_summary(db)
    data["recent_sales"] = [to_sale_read(sale) for sale in data["recent_sales"]]
    return DashboardSummary(**data)


@router.get("", response_class=HTMLResponse)
def dashboard_page(request: Request, db: Session = Depends(get_db)):
    settings = get_settings()
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "app_name": settings.APP_NAME,
            "currency": settings.CURRENCY_SYMBOL,
            "dashboard_data": jsonable_encoder(_summary(db)),
        },
    )


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary_api(db: Session = Depends(get_db)):
    return _summary(db)
