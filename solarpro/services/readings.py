"""Reading store access and the dashboard queries built on it."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from solarpro.models.enums import ViewMode
from solarpro.models.reading import DailyReading
from solarpro.schemas.dashboard import DashboardResponse, ViewState
from solarpro.schemas.reading import DerivedReading, ReadingCreate
from solarpro.schemas.stats import MonthlyBucket, PeriodStats
from solarpro.services.dashboard import EnergyReport

logger = logging.getLogger(__name__)

# Latest computed report; replaced whenever a newer snapshot differs from it
_latest_report: EnergyReport | None = None


def list_all(db: Session) -> list[DailyReading]:
    """Get every reading, oldest date first."""
    return db.query(DailyReading).order_by(DailyReading.date.asc()).all()


def get_reading(db: Session, reading_id: int) -> DailyReading | None:
    """Get a reading by ID."""
    return db.query(DailyReading).filter(DailyReading.id == reading_id).first()


def _duplicate_date(day) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"A reading for {day.isoformat()} already exists",
    )


def insert_reading(db: Session, reading_data: ReadingCreate) -> DailyReading:
    """Record one day of meter totals."""
    existing = db.query(DailyReading).filter(DailyReading.date == reading_data.date).first()
    if existing:
        raise _duplicate_date(reading_data.date)

    if reading_data.exported > reading_data.produced:
        logger.warning(
            "Reading for %s exports more than it produced (%s > %s)",
            reading_data.date,
            reading_data.exported,
            reading_data.produced,
        )

    db_reading = DailyReading(
        date=reading_data.date,
        produced=reading_data.produced,
        exported=reading_data.exported,
        imported=reading_data.imported,
    )
    db.add(db_reading)
    try:
        db.commit()
    except IntegrityError:
        # Another insert for the same date won the race
        db.rollback()
        raise _duplicate_date(reading_data.date) from None
    db.refresh(db_reading)
    invalidate_report()
    logger.info("Recorded reading %s for %s", db_reading.id, db_reading.date)
    return db_reading


def delete_reading(db: Session, reading_id: int) -> bool:
    """Delete a reading. Returns False if it does not exist."""
    reading = get_reading(db, reading_id)
    if not reading:
        return False

    db.delete(reading)
    db.commit()
    invalidate_report()
    logger.info("Deleted reading %s", reading_id)
    return True


def invalidate_report() -> None:
    """Drop the cached report so the next query recomputes it."""
    global _latest_report
    _latest_report = None


def get_report(db: Session) -> EnergyReport:
    """Build a report from the current rows, reusing the cached one if unchanged."""
    global _latest_report
    report = EnergyReport(list_all(db))
    cached = _latest_report
    if cached is not None and cached.fingerprint == report.fingerprint:
        return cached
    _latest_report = report
    return report


def get_derived_readings(db: Session) -> list[DerivedReading]:
    """Every reading with its derived metrics, oldest date first."""
    return list(get_report(db).derived)


def get_stats_for_period(db: Session, mode: ViewMode | str, selector: str) -> PeriodStats | None:
    """Stats of the selected period, or None if it has no readings."""
    return get_report(db).stats_for_period(mode, selector)


def get_monthly_rollup(db: Session, year: str) -> list[MonthlyBucket]:
    """Produced/consumed per month of ``year``."""
    return get_report(db).monthly_rollup(year)


def get_dashboard(db: Session, view: ViewState) -> DashboardResponse:
    """Dashboard payload for ``view``."""
    return get_report(db).dashboard(view)
