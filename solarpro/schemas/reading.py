"""Reading schemas for request/response validation."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class ReadingCreate(BaseModel):
    """Schema for recording one day of meter totals."""

    date: dt.date
    produced: Decimal = Field(ge=0, decimal_places=3, description="kWh generated")
    exported: Decimal = Field(ge=0, decimal_places=3, description="kWh sent to the grid")
    imported: Decimal = Field(ge=0, decimal_places=3, description="kWh drawn from the grid")


class ReadingResponse(BaseModel):
    """Schema for a stored reading."""

    id: int
    date: dt.date
    produced: Decimal
    exported: Decimal
    imported: Decimal
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class DerivedReading(BaseModel):
    """A reading with its computed per-day metrics.

    ``date`` is kept as the raw ``YYYY-MM-DD`` text so period filters can
    match on string prefixes; it is ``None`` when the source row had none.
    """

    id: int | str | None = None
    date: str | None = None
    produced: Decimal
    exported: Decimal
    imported: Decimal
    self_used: Decimal
    consumed: Decimal
    efficiency: Decimal

    model_config = {"frozen": True}
