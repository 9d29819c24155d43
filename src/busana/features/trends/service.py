"""
Monthly Trends Service

Builds the month-over-month KPI comparison and the lightweight revenue and
profit summary card. Both resolve the comparison months from the newest
sales record and answer with a neutral "No Data" payload when there are no
sales at all.
"""

import asyncio
import logging

from ...core.config import PAYROLL_EXPENSE_CATEGORY
from ...core.database import DataStore
from .calculations import compute_trends, simple_change, summarize_trends
from .metrics import aggregate_period, sales_totals, stock_snapshot
from .periods import NO_DATA_LABEL, Period, resolve_periods
from .schemas import (
    BasicMetrics, MonthlyTrendSummaryData, MonthlyTrendsData, PeriodReport, TrendSummary,
)

logger = logging.getLogger(__name__)


def _period_report(period: Period, metrics) -> PeriodReport:
    return PeriodReport(
        label=period.label,
        start_date=period.start,
        end_date=period.end,
        metrics=metrics.model_dump(by_alias=True),
    )


def empty_monthly_trends() -> MonthlyTrendsData:
    return MonthlyTrendsData(
        current_period=PeriodReport(label=NO_DATA_LABEL),
        previous_period=PeriodReport(label=NO_DATA_LABEL),
        trends={},
        summary=TrendSummary(),
    )


async def build_monthly_trends(
    store: DataStore, payroll_category: str = PAYROLL_EXPENSE_CATEGORY
) -> MonthlyTrendsData:
    """
    Compare every KPI for the latest data month against the month before.

    Args:
        store: Connected data store to read from.
        payroll_category: Cash flow expense category counted as payroll.

    Returns:
        MonthlyTrendsData with both periods' metrics, the catalog stock
        snapshot, per-KPI trends and the improving/declining tally.
    """
    conn = store.connection
    periods = await resolve_periods(conn)
    if periods is None:
        return empty_monthly_trends()
    current, previous = periods

    current_metrics, previous_metrics, stock = await asyncio.gather(
        aggregate_period(conn, current, payroll_category),
        aggregate_period(conn, previous, payroll_category),
        stock_snapshot(conn),
    )

    trends = compute_trends(current_metrics, previous_metrics)
    summary = summarize_trends(trends.values())

    logger.info(
        "Monthly trends %s vs %s: orders %d -> %d, revenue %.2f -> %.2f (%.1f%%), "
        "%d improving, %d declining",
        current.label, previous.label,
        previous_metrics.distinct_orders, current_metrics.distinct_orders,
        previous_metrics.total_revenue, current_metrics.total_revenue,
        trends["totalRevenue"].percentage_change,
        summary.improving_kpis, summary.declining_kpis,
    )

    return MonthlyTrendsData(
        current_period=_period_report(current, current_metrics),
        previous_period=_period_report(previous, previous_metrics),
        stock_metrics=stock,
        trends=trends,
        summary=summary,
    )


def _basic_metrics(totals) -> BasicMetrics:
    return BasicMetrics(
        revenue=totals["total_revenue"],
        profit=totals["settlement_amount"] - totals["hpp"],
        sales=totals["row_count"],
    )


async def build_monthly_trend_summary(store: DataStore) -> MonthlyTrendSummaryData:
    """Revenue and profit change only, for the single dashboard card."""
    conn = store.connection
    periods = await resolve_periods(conn)
    if periods is None:
        return MonthlyTrendSummaryData(current_month=NO_DATA_LABEL, previous_month=NO_DATA_LABEL)
    current, previous = periods

    current_totals, previous_totals = await asyncio.gather(
        sales_totals(conn, current), sales_totals(conn, previous)
    )
    current_basics = _basic_metrics(current_totals)
    previous_basics = _basic_metrics(previous_totals)

    return MonthlyTrendSummaryData(
        current_month=current.label,
        previous_month=previous.label,
        revenue_change=simple_change(current_basics.revenue, previous_basics.revenue),
        profit_change=simple_change(current_basics.profit, previous_basics.profit),
        current_metrics=current_basics,
        previous_metrics=previous_basics,
    )
