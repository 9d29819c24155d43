"""Response schemas for the monthly trend endpoints.

Field names are snake_case in Python and camelCase on the wire, which is
what the dashboard reads. Acronym metrics (GMV, HPP, KPIs) carry explicit
aliases."""
import datetime
from enum import Enum
from typing import Dict, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT


# Tailwind text classes the dashboard uses to tint trend badges.
NEUTRAL_COLOR = "text-gray-600"
IMPROVING_COLOR = "text-green-600"
DECLINING_COLOR = "text-red-600"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class MetricSet(CamelModel):
    """Aggregated KPIs for one calendar month. Absent aggregates are 0."""

    distinct_orders: int = 0
    total_quantity_sold: int = 0
    total_gmv: float = Field(0.0, alias="totalGMV")
    total_revenue: float = 0.0
    total_settlement_amount: float = 0.0
    total_hpp: float = Field(0.0, alias="totalHPP")
    total_profit: float = 0.0
    total_advertising_settlement: float = 0.0
    total_affiliate_endorse_fee: float = 0.0
    total_affiliate_actual_sales: float = 0.0
    total_affiliate_commission: float = 0.0
    total_salaries_benefits: float = 0.0
    net_profit: float = 0.0
    average_order_value: float = 0.0


class StockMetrics(CamelModel):
    total_products: int = 0
    low_stock_products: int = 0
    out_of_stock_products: int = 0
    total_stock_quantity: int = 0
    total_stock_value: float = 0.0
    average_stock_per_product: float = 0.0


class TrendResult(CamelModel):
    percentage_change: float
    direction: Direction
    color: str
    is_improvement: bool
    absolute_change: float


class TrendSummary(CamelModel):
    total_kpis: int = Field(0, alias="totalKPIs")
    improving_kpis: int = Field(0, alias="improvingKPIs")
    declining_kpis: int = Field(0, alias="decliningKPIs")
    neutral_kpis: int = Field(0, alias="neutralKPIs")


class PeriodReport(CamelModel):
    label: str
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    metrics: Dict[str, Union[int, float]] = Field(default_factory=dict)


class MonthlyTrendsData(CamelModel):
    current_period: PeriodReport
    previous_period: PeriodReport
    stock_metrics: Optional[StockMetrics] = None
    trends: Dict[str, TrendResult] = Field(default_factory=dict)
    summary: TrendSummary = Field(default_factory=TrendSummary)


# Lightweight summary card
class ChangeIndicator(CamelModel):
    percentage: float = 0.0
    direction: Direction = Direction.NEUTRAL
    color: str = NEUTRAL_COLOR


class BasicMetrics(CamelModel):
    revenue: float = 0.0
    profit: float = 0.0
    sales: int = 0


class MonthlyTrendSummaryData(CamelModel):
    current_month: str
    previous_month: str
    revenue_change: ChangeIndicator = Field(default_factory=ChangeIndicator)
    profit_change: ChangeIndicator = Field(default_factory=ChangeIndicator)
    current_metrics: BasicMetrics = Field(default_factory=BasicMetrics)
    previous_metrics: BasicMetrics = Field(default_factory=BasicMetrics)
