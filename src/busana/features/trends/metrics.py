"""
Per-period KPI aggregation.

Sales are mandatory: a failing sales query fails the report. Advertising,
affiliate and payroll ledgers are optional side tables, so their reads go
through resilient_aggregate and fall back to zero totals. Sums are reduced
in Python from ``values()`` rows, the same way the rest of the reporting
code totals order lines.
"""

import asyncio
import logging
from typing import Awaitable, Dict, Iterable, Mapping, TypeVar

from tortoise import BaseDBAsyncClient
from tortoise.exceptions import BaseORMException
from tortoise.functions import Count

from ...core.config import PAYROLL_EXPENSE_CATEGORY
from ..catalog.models import Product
from ..ledgers.models import AdvertisingSettlement, AffiliateEndorsement, CashFlowEntry
from ..sales.models import SalesRecord
from .periods import Period
from .schemas import MetricSet, StockMetrics

logger = logging.getLogger(__name__)

T = TypeVar("T")

SALES_SUM_FIELDS = ("quantity", "order_amount", "total_revenue", "settlement_amount", "hpp")
AFFILIATE_SUM_FIELDS = ("endorse_fee", "actual_sales", "total_commission")


async def resilient_aggregate(source: str, query: Awaitable[T], default: T) -> T:
    """Await an optional-source aggregate, substituting ``default`` if the ORM fails."""
    try:
        return await query
    except BaseORMException as e:
        logger.warning(f"Optional source '{source}' unavailable, using zero totals: {e}")
        return default


def sum_fields(rows: Iterable[Mapping], names: Iterable[str]) -> Dict[str, float]:
    names = tuple(names)
    totals = dict.fromkeys(names, 0)
    for row in rows:
        for name in names:
            totals[name] += row.get(name) or 0
    return totals


async def sales_totals(conn: BaseDBAsyncClient, period: Period) -> Dict[str, float]:
    start, end = period.bounds()
    rows = await (
        SalesRecord.filter(created_time__gte=start, created_time__lt=end)
        .using_db(conn)
        .values(*SALES_SUM_FIELDS)
    )
    totals = sum_fields(rows, SALES_SUM_FIELDS)
    totals["row_count"] = len(rows)
    return totals


async def distinct_order_count(conn: BaseDBAsyncClient, period: Period) -> int:
    """Unique order ids in the period; one order may have several line rows."""
    start, end = period.bounds()
    orders = await (
        SalesRecord.filter(created_time__gte=start, created_time__lt=end)
        .using_db(conn)
        .annotate(lines=Count("id"))
        .group_by("order_id")
        .values("order_id", "lines")
    )
    return len(orders)


async def advertising_total(conn: BaseDBAsyncClient, period: Period) -> float:
    start, end = period.bounds()
    amounts = await (
        AdvertisingSettlement.filter(order_settled_time__gte=start, order_settled_time__lt=end)
        .using_db(conn)
        .values_list("settlement_amount", flat=True)
    )
    return sum(amount or 0 for amount in amounts)


async def affiliate_totals(conn: BaseDBAsyncClient, period: Period) -> Dict[str, float]:
    start, end = period.bounds()
    rows = await (
        AffiliateEndorsement.filter(created_at__gte=start, created_at__lt=end)
        .using_db(conn)
        .values(*AFFILIATE_SUM_FIELDS)
    )
    return sum_fields(rows, AFFILIATE_SUM_FIELDS)


async def payroll_total(
    conn: BaseDBAsyncClient, period: Period, category: str = PAYROLL_EXPENSE_CATEGORY
) -> float:
    amounts = await (
        CashFlowEntry.filter(
            entry_type="expense", category=category,
            date__gte=period.start, date__lte=period.end,
        )
        .using_db(conn)
        .values_list("amount", flat=True)
    )
    return sum(amount or 0 for amount in amounts)


def build_metric_set(
    sales: Mapping[str, float],
    distinct_orders: int,
    advertising: float,
    affiliate: Mapping[str, float],
    payroll: float,
) -> MetricSet:
    """Fold raw totals into a MetricSet; derived KPIs only see resolved numbers."""
    revenue = sales.get("total_revenue") or 0
    settlement = sales.get("settlement_amount") or 0
    hpp = sales.get("hpp") or 0
    advertising = advertising or 0
    endorse_fee = affiliate.get("endorse_fee") or 0
    payroll = payroll or 0

    profit = settlement - hpp
    return MetricSet(
        distinct_orders=distinct_orders,
        total_quantity_sold=sales.get("quantity") or 0,
        total_gmv=sales.get("order_amount") or 0,
        total_revenue=revenue,
        total_settlement_amount=settlement,
        total_hpp=hpp,
        total_profit=profit,
        total_advertising_settlement=advertising,
        total_affiliate_endorse_fee=endorse_fee,
        total_affiliate_actual_sales=affiliate.get("actual_sales") or 0,
        total_affiliate_commission=affiliate.get("total_commission") or 0,
        total_salaries_benefits=payroll,
        net_profit=profit - advertising - endorse_fee - payroll,
        average_order_value=revenue / distinct_orders if distinct_orders > 0 else 0,
    )


async def aggregate_period(
    conn: BaseDBAsyncClient, period: Period, payroll_category: str = PAYROLL_EXPENSE_CATEGORY
) -> MetricSet:
    sales, orders, advertising, affiliate, payroll = await asyncio.gather(
        sales_totals(conn, period),
        distinct_order_count(conn, period),
        resilient_aggregate("advertising_settlement", advertising_total(conn, period), 0.0),
        resilient_aggregate(
            "affiliate_endorsements",
            affiliate_totals(conn, period),
            dict.fromkeys(AFFILIATE_SUM_FIELDS, 0.0),
        ),
        resilient_aggregate("cash_flow_entries", payroll_total(conn, period, payroll_category), 0.0),
    )
    return build_metric_set(sales, orders, advertising, affiliate, payroll)


async def stock_snapshot(conn: BaseDBAsyncClient) -> StockMetrics:
    """Current catalog stock position; not tied to any period."""
    products = await Product.all().using_db(conn)
    total_products = len(products)
    total_quantity = sum(p.stock_quantity for p in products)
    return StockMetrics(
        total_products=total_products,
        low_stock_products=sum(1 for p in products if p.is_low_stock),
        out_of_stock_products=sum(1 for p in products if p.is_out_of_stock),
        total_stock_quantity=total_quantity,
        total_stock_value=sum(p.stock_quantity * p.price for p in products),
        average_stock_per_product=total_quantity / total_products if total_products > 0 else 0,
    )
