import logging
from fastapi import APIRouter

from ...core.dependencies import StoreDep
from ...core.errors import ReportError
from .schemas import ApiResponse, MonthlyTrendsData, MonthlyTrendSummaryData
from . import service as trend_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/monthly-trends",
    tags=["Monthly Trends"],
    responses={500: {"description": "Trend computation failed"}},
)


@router.get(
    "",
    response_model=ApiResponse[MonthlyTrendsData],
    response_model_exclude_none=True,
)
async def get_monthly_trends(store: StoreDep):
    """Month-over-month KPI comparison anchored to the latest sales month."""
    try:
        data = await trend_service.build_monthly_trends(store)
    except Exception as e:
        logger.exception("Error fetching monthly trends")
        raise ReportError("Failed to fetch monthly trends") from e
    return ApiResponse[MonthlyTrendsData](data=data)


@router.get(
    "/summary",
    response_model=ApiResponse[MonthlyTrendSummaryData],
    response_model_exclude_none=True,
)
async def get_monthly_trend_summary(store: StoreDep):
    """Lightweight revenue/profit change for a single dashboard card."""
    try:
        data = await trend_service.build_monthly_trend_summary(store)
    except Exception as e:
        logger.exception("Error fetching monthly trend summary")
        raise ReportError("Failed to fetch monthly trend summary") from e
    return ApiResponse[MonthlyTrendSummaryData](data=data)
