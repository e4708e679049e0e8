"""Display formatting for period statistics.

Rounding policy: totals to 1 decimal place, averages to 2, rates to 1, all
``ROUND_HALF_UP``. Arithmetic happens on the unrounded values first.
"""

from decimal import ROUND_HALF_UP, Decimal

from solarpro.schemas.stats import PeriodStats, PeriodStatsDisplay

TOTAL_PLACES = 1
AVERAGE_PLACES = 2
RATE_PLACES = 1

HUNDRED = Decimal("100")


def format_decimal(value: Decimal, places: int) -> str:
    """Render ``value`` with a fixed number of decimal places."""
    quantized = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if quantized == 0:
        # Avoid "-0.0"
        quantized = abs(quantized)
    return f"{quantized:f}"


def format_stats(stats: PeriodStats) -> PeriodStatsDisplay:
    """Build the text shown on the summary cards."""
    return PeriodStatsDisplay(
        total_produced=format_decimal(stats.total_produced, TOTAL_PLACES),
        total_consumed=format_decimal(stats.total_consumed, TOTAL_PLACES),
        total_exported=format_decimal(stats.total_exported, TOTAL_PLACES),
        total_imported=format_decimal(stats.total_imported, TOTAL_PLACES),
        total_self_used=format_decimal(stats.total_self_used, TOTAL_PLACES),
        avg_produced=format_decimal(stats.avg_produced, AVERAGE_PLACES),
        avg_consumed=format_decimal(stats.avg_consumed, AVERAGE_PLACES),
        self_consumption_rate=format_decimal(stats.self_consumption_rate, RATE_PLACES),
        grid_feed_rate=format_decimal(HUNDRED - stats.self_consumption_rate, RATE_PLACES),
        grid_reliance_rate=format_decimal(stats.grid_reliance_rate, RATE_PLACES),
        solar_powered_rate=format_decimal(HUNDRED - stats.grid_reliance_rate, RATE_PLACES),
        net_export=format_decimal(stats.net_export, TOTAL_PLACES),
        balance="SURPLUS" if stats.net_export >= 0 else "DEFICIT",
    )
