"""Energy derivation and aggregation over daily readings.

Everything here is pure: functions take a snapshot of readings plus a view
selector and return fresh results. Rows can be ORM ``DailyReading`` objects
or plain mappings with the same keys.
"""

import calendar
import datetime as dt
import re
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation

from solarpro.models.enums import ViewMode
from solarpro.schemas.reading import DerivedReading
from solarpro.schemas.stats import MonthlyBucket, PeriodStats

ZERO = Decimal("0")
HUNDRED = Decimal("100")

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_MONTH_RE = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])")
_YEAR_RE = re.compile(r"[0-9]{4}")


class InvalidPeriodError(ValueError):
    """Raised when a period selector does not match its view mode."""


def to_decimal(value: object) -> Decimal:
    """Coerce a raw field to Decimal; missing or unparseable values are 0."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


def is_valid_date(value: str | None) -> bool:
    """Check for a real calendar date written as YYYY-MM-DD."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        return False
    try:
        dt.date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_selector(mode: ViewMode | str, selector: str) -> str:
    """Return ``selector`` unchanged if it is well-formed for ``mode``."""
    mode = ViewMode(mode)
    if mode == ViewMode.DAY:
        valid = is_valid_date(selector)
    elif mode == ViewMode.MONTH:
        valid = isinstance(selector, str) and bool(_MONTH_RE.fullmatch(selector))
    else:
        valid = isinstance(selector, str) and bool(_YEAR_RE.fullmatch(selector))
    if not valid:
        raise InvalidPeriodError(f"Invalid {mode.value} selector: {selector!r}")
    return selector


def _field(reading: object, name: str) -> object:
    if isinstance(reading, Mapping):
        return reading.get(name)
    return getattr(reading, name, None)


def _date_text(value: object) -> str | None:
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, str):
        return value
    return None


def _rate(part: Decimal, whole: Decimal) -> Decimal:
    # Zero denominator reports a 0% rate
    if whole == 0:
        return ZERO
    return part / whole * HUNDRED


def derive(reading: object) -> DerivedReading:
    """Compute self-used, consumed and efficiency for one raw reading.

    Exports above production are not corrected: they produce a negative
    ``self_used`` (and efficiency), which flags a suspect reading.
    """
    produced = to_decimal(_field(reading, "produced"))
    exported = to_decimal(_field(reading, "exported"))
    imported = to_decimal(_field(reading, "imported"))
    self_used = produced - exported

    return DerivedReading(
        id=_field(reading, "id"),
        date=_date_text(_field(reading, "date")),
        produced=produced,
        exported=exported,
        imported=imported,
        self_used=self_used,
        consumed=self_used + imported,
        efficiency=_rate(self_used, produced) if produced > 0 else ZERO,
    )


def derive_all(readings: Iterable[object]) -> list[DerivedReading]:
    """Derive every reading, keeping input order."""
    return [derive(r) for r in readings]


def filter_by_period(
    readings: Iterable[DerivedReading],
    mode: ViewMode | str,
    selector: str,
) -> list[DerivedReading]:
    """Select the readings that fall in the given day, month or year.

    Day selectors match dates exactly; month and year selectors match as
    prefixes. Readings without a valid date are skipped.
    """
    mode = ViewMode(mode)
    validate_selector(mode, selector)

    if mode == ViewMode.DAY:
        return [r for r in readings if is_valid_date(r.date) and r.date == selector]
    return [r for r in readings if is_valid_date(r.date) and r.date.startswith(selector)]


def aggregate(period_readings: list[DerivedReading]) -> PeriodStats | None:
    """Summarize a period's readings; ``None`` when the period has no data."""
    if not period_readings:
        return None

    count = len(period_readings)
    total_produced = sum((r.produced for r in period_readings), ZERO)
    total_exported = sum((r.exported for r in period_readings), ZERO)
    total_imported = sum((r.imported for r in period_readings), ZERO)
    total_consumed = sum((r.consumed for r in period_readings), ZERO)
    total_self_used = sum((r.self_used for r in period_readings), ZERO)

    return PeriodStats(
        reading_count=count,
        total_produced=total_produced,
        total_consumed=total_consumed,
        total_exported=total_exported,
        total_imported=total_imported,
        total_self_used=total_self_used,
        avg_produced=total_produced / count,
        avg_consumed=total_consumed / count,
        self_consumption_rate=_rate(total_self_used, total_produced),
        grid_reliance_rate=_rate(total_imported, total_consumed),
        net_export=total_exported - total_imported,
    )


def rollup_by_month(readings: Iterable[DerivedReading], year: str) -> list[MonthlyBucket]:
    """Bucket a year's readings into 12 monthly sums, January first.

    Months without readings are kept with zero sums so a chart always has
    twelve slots.
    """
    validate_selector(ViewMode.YEAR, year)
    readings = list(readings)

    buckets: list[MonthlyBucket] = []
    for month in range(1, 13):
        period = f"{year}-{month:02d}"
        in_month = filter_by_period(readings, ViewMode.MONTH, period)
        buckets.append(
            MonthlyBucket(
                month=month,
                label=calendar.month_abbr[month],
                period=period,
                produced=sum((r.produced for r in in_month), ZERO),
                consumed=sum((r.consumed for r in in_month), ZERO),
            )
        )
    return buckets
