"""Period statistics and yearly rollup routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from solarpro.core.database import get_db
from solarpro.models.enums import ViewMode
from solarpro.schemas.stats import MonthlyBucket, PeriodStats
from solarpro.services import readings as reading_service
from solarpro.services.energy import InvalidPeriodError

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/period", response_model=PeriodStats | None)
def get_period_stats(
    mode: ViewMode = Query(..., description="day, month or year"),
    selector: str = Query(..., description="YYYY-MM-DD, YYYY-MM or YYYY"),
    db: Session = Depends(get_db),
):
    """
    Get summary statistics for a day, month or year.

    Returns null when the period has no readings.
    """
    try:
        return reading_service.get_stats_for_period(db, mode, selector)
    except InvalidPeriodError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


@router.get("/rollup/{year}", response_model=list[MonthlyBucket])
def get_monthly_rollup(year: str, db: Session = Depends(get_db)):
    """Get produced and consumed totals for each month of a year."""
    try:
        return reading_service.get_monthly_rollup(db, year)
    except InvalidPeriodError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
