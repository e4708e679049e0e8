"""Aggregated statistics schemas."""

from decimal import Decimal

from pydantic import BaseModel


class PeriodStats(BaseModel):
    """Summary of the readings in one day, month or year."""

    reading_count: int
    total_produced: Decimal
    total_consumed: Decimal
    total_exported: Decimal
    total_imported: Decimal
    total_self_used: Decimal
    avg_produced: Decimal
    avg_consumed: Decimal
    self_consumption_rate: Decimal
    grid_reliance_rate: Decimal
    net_export: Decimal

    model_config = {"frozen": True}


class PeriodStatsDisplay(BaseModel):
    """Fixed-precision text rendering of PeriodStats for the summary cards."""

    total_produced: str
    total_consumed: str
    total_exported: str
    total_imported: str
    total_self_used: str
    avg_produced: str
    avg_consumed: str
    self_consumption_rate: str
    grid_feed_rate: str
    grid_reliance_rate: str
    solar_powered_rate: str
    net_export: str
    balance: str


class MonthlyBucket(BaseModel):
    """Produced/consumed sums for one calendar month of a year."""

    month: int
    label: str
    period: str
    produced: Decimal
    consumed: Decimal

    model_config = {"frozen": True}
