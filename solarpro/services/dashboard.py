"""Cached dashboard computations for one snapshot of readings."""

from collections.abc import Iterable
from datetime import UTC, datetime

from solarpro.models.enums import ViewMode
from solarpro.schemas.dashboard import DashboardResponse, ViewState
from solarpro.schemas.reading import DerivedReading
from solarpro.schemas.stats import MonthlyBucket, PeriodStats
from solarpro.services.energy import (
    aggregate,
    derive_all,
    filter_by_period,
    is_valid_date,
    rollup_by_month,
    validate_selector,
)
from solarpro.services.formatting import format_stats


def fingerprint(derived: Iterable[DerivedReading]) -> int:
    """Hash the raw fields of a derived snapshot.

    Two snapshots with the same rows in the same order share a fingerprint.
    """
    return hash(tuple((r.id, r.date, r.produced, r.exported, r.imported) for r in derived))


def available_years(readings: Iterable[DerivedReading]) -> list[str]:
    """Years that have readings, newest first, always including this year."""
    years = {r.date[:4] for r in readings if is_valid_date(r.date)}
    years.add(str(datetime.now(UTC).year))
    return sorted(years, reverse=True)


class EnergyReport:
    """Derived readings and per-period results for one snapshot.

    Derivation runs once on construction. Period stats and monthly rollups
    are memoized per selector; build a new report when the snapshot changes.
    """

    def __init__(self, readings: Iterable[object]) -> None:
        self.derived = derive_all(readings)
        self.fingerprint = fingerprint(self.derived)
        self._stats: dict[tuple[ViewMode, str], PeriodStats | None] = {}
        self._rollups: dict[str, list[MonthlyBucket]] = {}

    def period_readings(self, mode: ViewMode | str, selector: str) -> list[DerivedReading]:
        """Derived readings inside the selected period."""
        return filter_by_period(self.derived, mode, selector)

    def stats_for_period(self, mode: ViewMode | str, selector: str) -> PeriodStats | None:
        """Aggregated stats of a period, or ``None`` if it has no readings."""
        key = (ViewMode(mode), validate_selector(mode, selector))
        if key not in self._stats:
            self._stats[key] = aggregate(self.period_readings(*key))
        return self._stats[key]

    def monthly_rollup(self, year: str) -> list[MonthlyBucket]:
        """Twelve monthly buckets for ``year``."""
        if year not in self._rollups:
            self._rollups[year] = rollup_by_month(self.derived, year)
        return list(self._rollups[year])

    def dashboard(self, view: ViewState) -> DashboardResponse:
        """Assemble the dashboard payload for ``view``."""
        selector = view.selector
        stats = self.stats_for_period(view.mode, selector)
        return DashboardResponse(
            view=view,
            selector=selector,
            stats=stats,
            display=format_stats(stats) if stats is not None else None,
            readings=self.period_readings(view.mode, selector),
            monthly=self.monthly_rollup(selector) if view.mode == ViewMode.YEAR else None,
            available_years=available_years(self.derived),
        )
