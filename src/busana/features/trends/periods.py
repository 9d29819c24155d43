"""Calendar-month periods anchored to the newest sales record.

The comparison months come from the data, not from today's date, so a
stale or historical dataset still compares its last two months instead of
two empty ones.
"""

import calendar
import datetime
import logging
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict
from tortoise import BaseDBAsyncClient

from ..sales.models import SalesRecord

logger = logging.getLogger(__name__)

NO_DATA_LABEL = "No Data"


class Period(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    start: datetime.date
    end: datetime.date

    @classmethod
    def for_month(cls, day: datetime.date) -> "Period":
        start = day.replace(day=1)
        last_day = calendar.monthrange(start.year, start.month)[1]
        return cls(
            label=f"{calendar.month_name[start.month]} {start.year}",
            start=start,
            end=start.replace(day=last_day),
        )

    def previous(self) -> "Period":
        return Period.for_month(self.start - datetime.timedelta(days=1))

    def bounds(self) -> Tuple[datetime.datetime, datetime.datetime]:
        """
        Naive UTC range [start, start of next month) covering the whole month.

        Naive to match the stored timestamps (see TimestampMixin.save); an
        aware bound would compare as different text in SQLite.
        """
        start = datetime.datetime.combine(self.start, datetime.time.min)
        end = datetime.datetime.combine(self.end + datetime.timedelta(days=1), datetime.time.min)
        return start, end


def as_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


async def find_latest_sale_time(conn: BaseDBAsyncClient) -> Optional[datetime.datetime]:
    latest = await SalesRecord.all().using_db(conn).order_by("-created_time").first()
    if latest is None:
        return None
    return as_utc(latest.created_time)


def periods_for(latest: datetime.datetime) -> Tuple[Period, Period]:
    current = Period.for_month(as_utc(latest).date())
    return current, current.previous()


async def resolve_periods(conn: BaseDBAsyncClient) -> Optional[Tuple[Period, Period]]:
    """
    Resolve (current, previous) months from the newest sales record.

    Returns None when the sales collection is empty; callers answer with the
    neutral "No Data" payload in that case.
    """
    latest = await find_latest_sale_time(conn)
    if latest is None:
        logger.info("No sales data found, trend periods cannot be resolved.")
        return None

    current, previous = periods_for(latest)
    logger.debug(
        "Trend periods resolved from latest sale %s: %s (%s..%s) vs %s (%s..%s)",
        latest.isoformat(), current.label, current.start, current.end,
        previous.label, previous.start, previous.end,
    )
    return current, previous
