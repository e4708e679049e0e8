"""Tests for energy derivation, period filtering and aggregation."""

from datetime import date
from decimal import Decimal

import pytest

from solarpro.models.enums import ViewMode
from solarpro.models.reading import DailyReading
from solarpro.services.energy import (
    InvalidPeriodError,
    aggregate,
    derive,
    derive_all,
    filter_by_period,
    is_valid_date,
    rollup_by_month,
    to_decimal,
    validate_selector,
)

JANUARY = [
    {"id": 1, "date": "2025-01-01", "produced": 10, "exported": 4, "imported": 2},
    {"id": 2, "date": "2025-01-02", "produced": 8, "exported": 2, "imported": 3},
]


class TestToDecimal:
    """Unit tests for raw field coercion."""

    def test_numbers_and_numeric_strings(self) -> None:
        """Test ints, floats and strings are converted exactly."""
        assert to_decimal(5) == Decimal("5")
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(" 12.5 ") == Decimal("12.5")
        assert to_decimal(Decimal("3.250")) == Decimal("3.25")

    @pytest.mark.parametrize("value", [None, "", "abc", "NaN", "inf", float("nan"), [1]])
    def test_missing_or_unparseable_values_are_zero(self, value: object) -> None:
        """Test absent data degrades to zero instead of raising."""
        assert to_decimal(value) == Decimal("0")


class TestDerive:
    """Unit tests for per-reading derivation."""

    def test_basic_derivation(self) -> None:
        """Test self-used, consumed and efficiency of a normal day."""
        result = derive(JANUARY[0])
        assert result.self_used == Decimal("6")
        assert result.consumed == Decimal("8")
        assert result.efficiency == Decimal("60")
        assert result.date == "2025-01-01"
        assert result.id == 1

    def test_consumed_is_self_used_plus_imported(self) -> None:
        """Test consumed = (produced - exported) + imported exactly."""
        reading = {"date": "2025-06-01", "produced": "12.345", "exported": "7.1", "imported": "0.9"}
        result = derive(reading)
        assert result.self_used == Decimal("12.345") - Decimal("7.1")
        assert result.consumed == (Decimal("12.345") - Decimal("7.1")) + Decimal("0.9")

    def test_efficiency_matches_formula(self) -> None:
        """Test efficiency = self_used / produced * 100 when produced > 0."""
        result = derive({"produced": 18, "exported": 6, "imported": 1})
        assert result.efficiency == result.self_used / result.produced * 100

    def test_zero_production_has_zero_efficiency(self) -> None:
        """Test produced == 0 gives efficiency 0 instead of a division error."""
        result = derive({"date": "2025-01-03", "produced": 0, "exported": 0, "imported": 7})
        assert result.efficiency == Decimal("0")
        assert result.consumed == Decimal("7")

    def test_export_above_production_is_propagated(self) -> None:
        """Test an invalid reading yields negative values rather than raising."""
        result = derive({"produced": 5, "exported": 7, "imported": 0})
        assert result.self_used == Decimal("-2")
        assert result.consumed == Decimal("-2")
        assert result.efficiency == Decimal("-40")

    def test_missing_fields_default_to_zero(self) -> None:
        """Test a reading with no numeric fields derives to zeros."""
        result = derive({"date": "2025-01-04", "produced": None})
        assert result.produced == Decimal("0")
        assert result.exported == Decimal("0")
        assert result.imported == Decimal("0")
        assert result.consumed == Decimal("0")
        assert result.efficiency == Decimal("0")

    def test_orm_row(self) -> None:
        """Test ORM rows are read through attributes and dates are rendered."""
        row = DailyReading(
            id=7,
            date=date(2025, 3, 15),
            produced=Decimal("20.000"),
            exported=Decimal("5.000"),
            imported=Decimal("1.500"),
        )
        result = derive(row)
        assert result.id == 7
        assert result.date == "2025-03-15"
        assert result.consumed == Decimal("16.5")
        assert result.efficiency == Decimal("75")


class TestDeriveAll:
    """Tests for collection derivation."""

    def test_preserves_order(self) -> None:
        """Test output order follows input order."""
        result = derive_all(reversed(JANUARY))
        assert [r.date for r in result] == ["2025-01-02", "2025-01-01"]

    def test_idempotent(self) -> None:
        """Test deriving the same collection twice gives equal results."""
        assert derive_all(JANUARY) == derive_all(JANUARY)

    def test_does_not_mutate_input(self) -> None:
        """Test the raw mappings are left untouched."""
        raw = [dict(r) for r in JANUARY]
        derive_all(raw)
        assert raw == JANUARY


class TestDateValidation:
    """Tests for date and selector validation."""

    @pytest.mark.parametrize("value", ["2025-01-01", "2024-02-29"])
    def test_valid_dates(self, value: str) -> None:
        """Test real calendar dates are accepted."""
        assert is_valid_date(value)

    @pytest.mark.parametrize(
        "value",
        [None, "", "2025-13-01", "2025-02-30", "2025-1-01", "20250101", "2025-01-01T00:00", 20250101],
    )
    def test_invalid_dates(self, value: object) -> None:
        """Test malformed dates are rejected."""
        assert not is_valid_date(value)

    @pytest.mark.parametrize(
        ("mode", "selector"),
        [(ViewMode.DAY, "2025-03-15"), (ViewMode.MONTH, "2025-03"), (ViewMode.YEAR, "2025")],
    )
    def test_valid_selectors(self, mode: ViewMode, selector: str) -> None:
        """Test well-formed selectors are returned unchanged."""
        assert validate_selector(mode, selector) == selector

    @pytest.mark.parametrize(
        ("mode", "selector"),
        [
            (ViewMode.DAY, "2025-03"),
            (ViewMode.MONTH, "2025-13"),
            (ViewMode.MONTH, "2025-3"),
            (ViewMode.YEAR, "202"),
            (ViewMode.YEAR, "2025-01"),
            (ViewMode.YEAR, "2025\n"),
            (ViewMode.MONTH, "2025-03\n"),
            (ViewMode.DAY, "2025-03-15\n"),
            (ViewMode.YEAR, "\uff12\uff10\uff12\uff15"),
            (ViewMode.MONTH, "\uff12\uff10\uff12\uff15-03"),
        ],
    )
    def test_invalid_selectors(self, mode: ViewMode, selector: str) -> None:
        """Test malformed selectors raise InvalidPeriodError."""
        with pytest.raises(InvalidPeriodError):
            validate_selector(mode, selector)


class TestFilterByPeriod:
    """Tests for day/month/year filtering."""

    @pytest.fixture
    def readings(self):
        """Derived readings across two months, one with a malformed date."""
        return derive_all(
            [
                {"id": 1, "date": "2025-02-28", "produced": 1},
                {"id": 2, "date": "2025-03-01", "produced": 2},
                {"id": 3, "date": "2025-03-15", "produced": 3},
                {"id": 4, "date": "2025-04-01", "produced": 4},
                {"id": 5, "date": "2025-13-01", "produced": 5},
                {"id": 6, "produced": 6},
                {"id": 7, "date": "2025-03-xx", "produced": 7},
            ]
        )

    def test_month_prefix_match(self, readings) -> None:
        """Test month mode includes only valid dates in that month."""
        result = filter_by_period(readings, ViewMode.MONTH, "2025-03")
        assert [r.id for r in result] == [2, 3]

    def test_day_exact_match(self, readings) -> None:
        """Test day mode compares dates exactly."""
        result = filter_by_period(readings, ViewMode.DAY, "2025-03-15")
        assert [r.id for r in result] == [3]

    def test_year_prefix_match_excludes_malformed(self, readings) -> None:
        """Test year mode skips missing and malformed dates."""
        result = filter_by_period(readings, "year", "2025")
        assert [r.id for r in result] == [1, 2, 3, 4]

    def test_empty_period(self, readings) -> None:
        """Test a period without readings gives an empty list."""
        assert filter_by_period(readings, ViewMode.YEAR, "2030") == []

    def test_deterministic(self, readings) -> None:
        """Test repeated calls return equal results."""
        first = filter_by_period(readings, ViewMode.MONTH, "2025-03")
        second = filter_by_period(readings, ViewMode.MONTH, "2025-03")
        assert first == second

    def test_invalid_selector(self, readings) -> None:
        """Test a selector in the wrong format is rejected."""
        with pytest.raises(InvalidPeriodError):
            filter_by_period(readings, ViewMode.MONTH, "2025")


class TestAggregate:
    """Tests for period aggregation."""

    def test_empty_period_has_no_stats(self) -> None:
        """Test an empty period yields None rather than zeroed stats."""
        assert aggregate([]) is None

    def test_january_example(self) -> None:
        """Test totals, averages and rates of the two-day January example."""
        stats = aggregate(filter_by_period(derive_all(JANUARY), ViewMode.MONTH, "2025-01"))
        assert stats is not None
        assert stats.reading_count == 2
        assert stats.total_produced == Decimal("18")
        assert stats.total_exported == Decimal("6")
        assert stats.total_imported == Decimal("5")
        assert stats.total_self_used == Decimal("12")
        assert stats.total_consumed == Decimal("17")
        assert stats.avg_produced == Decimal("9")
        assert stats.avg_consumed == Decimal("8.5")
        assert stats.net_export == Decimal("1")
        assert stats.self_consumption_rate == Decimal(12) / Decimal(18) * 100
        assert stats.grid_reliance_rate == Decimal(5) / Decimal(17) * 100

    def test_average_is_sum_over_count(self) -> None:
        """Test avg_produced == total_produced / count exactly."""
        readings = derive_all(
            [{"produced": "1.1"}, {"produced": "2.2"}, {"produced": "3.3"}]
        )
        stats = aggregate(readings)
        assert stats.total_produced == Decimal("6.6")
        assert stats.avg_produced == Decimal("6.6") / 3

    def test_zero_denominators_give_zero_rates(self) -> None:
        """Test rates are 0 when nothing was produced or consumed."""
        stats = aggregate(derive_all([{"date": "2025-01-01"}]))
        assert stats is not None
        assert stats.self_consumption_rate == Decimal("0")
        assert stats.grid_reliance_rate == Decimal("0")

    def test_invalid_reading_not_clamped(self) -> None:
        """Test a negative self-used value flows into the stats."""
        stats = aggregate(derive_all([{"produced": 5, "exported": 7, "imported": 0}]))
        assert stats.total_self_used == Decimal("-2")
        assert stats.self_consumption_rate == Decimal("-40")


class TestRollupByMonth:
    """Tests for the yearly monthly rollup."""

    def test_always_twelve_buckets_in_order(self) -> None:
        """Test an empty input still yields January..December."""
        buckets = rollup_by_month([], "2025")
        assert len(buckets) == 12
        assert [b.month for b in buckets] == list(range(1, 13))
        assert buckets[0].label == "Jan"
        assert buckets[11].label == "Dec"
        assert buckets[2].period == "2025-03"
        assert all(b.produced == 0 and b.consumed == 0 for b in buckets)

    def test_sums_per_month(self) -> None:
        """Test readings land in their month and other years are ignored."""
        readings = derive_all(
            JANUARY
            + [
                {"date": "2025-03-10", "produced": 20, "exported": 10, "imported": 1},
                {"date": "2024-03-10", "produced": 99, "exported": 0, "imported": 0},
                {"date": "2025-13-01", "produced": 50, "exported": 0, "imported": 0},
            ]
        )
        buckets = rollup_by_month(readings, "2025")
        assert len(buckets) == 12
        assert buckets[0].produced == Decimal("18")
        assert buckets[0].consumed == Decimal("17")
        assert buckets[1].produced == Decimal("0")
        assert buckets[2].produced == Decimal("20")
        assert buckets[2].consumed == Decimal("11")
        assert sum(b.produced for b in buckets) == Decimal("38")

    def test_invalid_year(self) -> None:
        """Test a malformed year is rejected."""
        with pytest.raises(InvalidPeriodError):
            rollup_by_month([], "25")
