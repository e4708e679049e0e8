"""DailyReading database model - one row of meter totals per day."""

import datetime as dt
from decimal import Decimal

from sqlalchemy import Numeric
from sqlalchemy.orm import Mapped, mapped_column

from solarpro.core.database import Base


class DailyReading(Base):
    """Raw per-day meter totals in kWh."""

    __tablename__ = "daily_readings"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Business key: one reading per calendar day
    date: Mapped[dt.date] = mapped_column(unique=True, index=True)

    # kWh values (using Decimal for precision)
    produced: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=3))
    exported: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=3))
    imported: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=3))

    created_at: Mapped[dt.datetime] = mapped_column(
        default=lambda: dt.datetime.now(dt.UTC),
    )  # When added to database
