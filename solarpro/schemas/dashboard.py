"""Dashboard view state and payload schemas."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from solarpro.models.enums import ViewMode
from solarpro.schemas.reading import DerivedReading
from solarpro.schemas.stats import MonthlyBucket, PeriodStats, PeriodStatsDisplay
from solarpro.services.energy import validate_selector


def _today() -> str:
    return datetime.now(UTC).date().isoformat()


class ViewState(BaseModel):
    """Selected view mode plus the remembered selector of every mode.

    Switching modes keeps the other selectors, so returning to a mode shows
    the period that was last picked there.
    """

    mode: ViewMode = ViewMode.MONTH
    selected_date: str = Field(default_factory=_today)
    selected_month: str = Field(default_factory=lambda: _today()[:7])
    selected_year: str = Field(default_factory=lambda: _today()[:4])

    @field_validator("selected_date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        """Validate the day selector."""
        return validate_selector(ViewMode.DAY, v)

    @field_validator("selected_month")
    @classmethod
    def validate_month(cls, v: str) -> str:
        """Validate the month selector."""
        return validate_selector(ViewMode.MONTH, v)

    @field_validator("selected_year")
    @classmethod
    def validate_year(cls, v: str) -> str:
        """Validate the year selector."""
        return validate_selector(ViewMode.YEAR, v)

    @property
    def selector(self) -> str:
        """Selector of the active mode."""
        if self.mode == ViewMode.DAY:
            return self.selected_date
        if self.mode == ViewMode.MONTH:
            return self.selected_month
        return self.selected_year

    def switch(self, mode: ViewMode | str) -> "ViewState":
        """Make ``mode`` active."""
        self.mode = ViewMode(mode)
        return self

    def select(self, value: str) -> "ViewState":
        """Change the selector of the active mode only."""
        validate_selector(self.mode, value)
        if self.mode == ViewMode.DAY:
            self.selected_date = value
        elif self.mode == ViewMode.MONTH:
            self.selected_month = value
        else:
            self.selected_year = value
        return self


class DashboardResponse(BaseModel):
    """Everything the dashboard page renders for one view."""

    view: ViewState
    selector: str
    stats: PeriodStats | None
    display: PeriodStatsDisplay | None
    readings: list[DerivedReading]
    monthly: list[MonthlyBucket] | None = None
    available_years: list[str]
