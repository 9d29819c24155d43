import datetime

import pytest
import pytest_asyncio

from busana.features.trends import service as trend_service
from busana.features.trends.schemas import Direction

from .utils import at


@pytest_asyncio.fixture
async def two_month_history(sale_factory, advertising_factory, product_factory):
    # March: 2 orders, 1,000,000 revenue. April: 3 orders, 1,500,000 revenue.
    for i in range(2):
        await sale_factory(f"MAR-{i}", at(2024, 3, 5 + i), total_revenue=500_000, hpp=200_000)
    for i in range(3):
        await sale_factory(f"APR-{i}", at(2024, 4, 5 + i), total_revenue=500_000, hpp=200_000)
    await advertising_factory(at(2024, 3, 20), 200_000)
    await advertising_factory(at(2024, 4, 20), 300_000)
    await product_factory("Kemeja Linen", stock_quantity=0)
    await product_factory("Rok Plisket", stock_quantity=12, price=120_000)


@pytest.mark.asyncio
async def test_monthly_trends_compare_latest_two_data_months(store, two_month_history):
    data = await trend_service.build_monthly_trends(store)

    assert data.current_period.label == "April 2024"
    assert data.current_period.start_date == datetime.date(2024, 4, 1)
    assert data.current_period.end_date == datetime.date(2024, 4, 30)
    assert data.previous_period.label == "March 2024"
    assert data.current_period.metrics["totalRevenue"] == pytest.approx(1_500_000)
    assert data.previous_period.metrics["distinctOrders"] == 2

    revenue = data.trends["totalRevenue"]
    assert revenue.percentage_change == pytest.approx(50)
    assert revenue.direction == Direction.UP
    assert revenue.is_improvement is True

    advertising = data.trends["totalAdvertisingSettlement"]
    assert advertising.percentage_change == pytest.approx(50)
    assert advertising.direction == Direction.UP
    assert advertising.is_improvement is False

    assert data.stock_metrics.total_products == 2
    assert data.stock_metrics.out_of_stock_products == 1
    assert data.summary.total_kpis == 10


@pytest.mark.asyncio
async def test_monthly_trends_net_profit_subtracts_ledgers(store, two_month_history):
    data = await trend_service.build_monthly_trends(store)

    april = data.current_period.metrics
    assert april["totalProfit"] == pytest.approx(1_500_000 - 600_000)
    assert april["netProfit"] == pytest.approx(900_000 - 300_000)
    assert april["averageOrderValue"] == pytest.approx(500_000)


@pytest.mark.asyncio
async def test_monthly_trends_without_sales(store, product_factory):
    await product_factory("Unsold Scarf")

    data = await trend_service.build_monthly_trends(store)

    assert data.current_period.label == "No Data"
    assert data.current_period.metrics == {}
    assert data.trends == {}
    assert data.summary.total_kpis == 0
    assert data.stock_metrics is None


@pytest.mark.asyncio
async def test_monthly_trends_are_idempotent(store, two_month_history):
    first = await trend_service.build_monthly_trends(store)
    second = await trend_service.build_monthly_trends(store)

    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


@pytest.mark.asyncio
async def test_single_month_of_data_compares_against_empty_month(store, sale_factory):
    await sale_factory("JAN-1", at(2025, 1, 10), total_revenue=250_000)

    data = await trend_service.build_monthly_trends(store)

    assert data.previous_period.label == "December 2024"
    assert data.trends["totalRevenue"].percentage_change == 100
    assert data.trends["averageOrderValue"].percentage_change == 100
    assert data.previous_period.metrics["averageOrderValue"] == 0


@pytest.mark.asyncio
async def test_monthly_summary(store, two_month_history):
    data = await trend_service.build_monthly_trend_summary(store)

    assert data.current_month == "April 2024"
    assert data.previous_month == "March 2024"
    assert data.revenue_change.percentage == pytest.approx(50)
    assert data.revenue_change.direction == Direction.UP
    assert data.current_metrics.revenue == pytest.approx(1_500_000)
    assert data.current_metrics.profit == pytest.approx(900_000)
    assert data.current_metrics.sales == 3
    assert data.previous_metrics.sales == 2
    assert data.profit_change.percentage == pytest.approx(50)


@pytest.mark.asyncio
async def test_monthly_summary_without_sales(store):
    data = await trend_service.build_monthly_trend_summary(store)

    assert data.current_month == data.previous_month == "No Data"
    assert data.revenue_change.direction == Direction.NEUTRAL
    assert data.revenue_change.color == "text-gray-600"
    assert data.current_metrics.sales == 0
