"""
Trend math for the monthly KPI comparison.

Everything in here is pure: no queries, no shared state. The KPI table
below is the single place that decides which metrics are trended and which
of them improve when they go down.
"""

from typing import Dict, Iterable, NamedTuple

from pydantic.alias_generators import to_camel

from .schemas import (
    DECLINING_COLOR, IMPROVING_COLOR, NEUTRAL_COLOR,
    ChangeIndicator, Direction, MetricSet, TrendResult, TrendSummary,
)


class KpiDescriptor(NamedTuple):
    lower_is_better: bool = False


# Keyed by MetricSet field name; order is the order of the "trends" payload.
KPI_DESCRIPTORS: Dict[str, KpiDescriptor] = {
    "distinct_orders": KpiDescriptor(),
    "total_quantity_sold": KpiDescriptor(),
    "total_gmv": KpiDescriptor(),
    "total_revenue": KpiDescriptor(),
    "total_settlement_amount": KpiDescriptor(),
    "total_profit": KpiDescriptor(),
    "total_advertising_settlement": KpiDescriptor(lower_is_better=True),
    "total_affiliate_endorse_fee": KpiDescriptor(lower_is_better=True),
    "net_profit": KpiDescriptor(),
    "average_order_value": KpiDescriptor(),
}


def percentage_change(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def direction_of(change: float) -> Direction:
    if change > 0:
        return Direction.UP
    if change < 0:
        return Direction.DOWN
    return Direction.NEUTRAL


def compute_trend(current: float, previous: float, lower_is_better: bool = False) -> TrendResult:
    """
    Compare one metric across two months.

    A flat metric (0% change) is not an improvement for normal metrics but is
    one for lower-is-better metrics, because only "went up" is negated.
    """
    change = percentage_change(current, previous)
    is_positive = change > 0
    is_improvement = not is_positive if lower_is_better else is_positive

    if change == 0:
        color = NEUTRAL_COLOR
    elif is_improvement:
        color = IMPROVING_COLOR
    else:
        color = DECLINING_COLOR

    return TrendResult(
        percentage_change=change,
        direction=direction_of(change),
        color=color,
        is_improvement=is_improvement,
        absolute_change=current - previous,
    )


def compute_trends(
    current: MetricSet,
    previous: MetricSet,
    descriptors: Dict[str, KpiDescriptor] = KPI_DESCRIPTORS,
) -> Dict[str, TrendResult]:
    """Trend every described KPI, keyed by its wire name (e.g. "totalGMV")."""
    trends = {}
    for name, descriptor in descriptors.items():
        key = MetricSet.model_fields[name].alias or to_camel(name)
        trends[key] = compute_trend(
            getattr(current, name), getattr(previous, name), descriptor.lower_is_better
        )
    return trends


def summarize_trends(trends: Iterable[TrendResult]) -> TrendSummary:
    """
    Tally improving, declining and neutral KPIs.

    Declining means "not improving and actually moved", so a flat
    lower-is-better KPI counts as both improving and neutral and the three
    tallies can exceed the total.
    """
    trends = list(trends)
    return TrendSummary(
        total_kpis=len(trends),
        improving_kpis=sum(1 for t in trends if t.is_improvement),
        declining_kpis=sum(
            1 for t in trends if not t.is_improvement and t.direction != Direction.NEUTRAL
        ),
        neutral_kpis=sum(1 for t in trends if t.direction == Direction.NEUTRAL),
    )


def simple_change(current: float, previous: float) -> ChangeIndicator:
    """
    Revenue/profit badge for the summary card.

    Only a positive previous value yields a percentage; a zero or negative
    baseline reports 0%. Colour follows the sign of the change.
    """
    change = (current - previous) / previous * 100 if previous > 0 else 0.0
    direction = direction_of(change)
    if direction == Direction.UP:
        color = IMPROVING_COLOR
    elif direction == Direction.DOWN:
        color = DECLINING_COLOR
    else:
        color = NEUTRAL_COLOR
    return ChangeIndicator(percentage=change, direction=direction, color=color)
