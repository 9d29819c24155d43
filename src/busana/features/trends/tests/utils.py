import datetime

UTC = datetime.timezone.utc
WIB = datetime.timezone(datetime.timedelta(hours=7), "WIB")


def at(year: int, month: int, day: int, hour: int = 10) -> datetime.datetime:
    """A UTC timestamp; sales and ledger rows in these tests are stamped with it."""
    return datetime.datetime(year, month, day, hour, 0, tzinfo=UTC)
