"""Dashboard route returning stats, display text and chart series together."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from solarpro.core.database import get_db
from solarpro.models.enums import ViewMode
from solarpro.schemas.dashboard import DashboardResponse, ViewState
from solarpro.services import readings as reading_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    mode: ViewMode = Query(ViewMode.MONTH),
    date: str | None = Query(None, description="Day selector, YYYY-MM-DD"),
    month: str | None = Query(None, description="Month selector, YYYY-MM"),
    year: str | None = Query(None, description="Year selector, YYYY"),
    db: Session = Depends(get_db),
):
    """
    Get the dashboard for a view.

    Selectors that are not given default to the current date. In year mode
    the response also carries twelve monthly buckets.
    """
    selectors = {
        "selected_date": date,
        "selected_month": month,
        "selected_year": year,
    }
    try:
        view = ViewState(
            mode=mode,
            **{key: value for key, value in selectors.items() if value is not None},
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="; ".join(error["msg"] for error in exc.errors()),
        ) from exc
    return reading_service.get_dashboard(db, view)
