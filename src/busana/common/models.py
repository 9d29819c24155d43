"""Shared model helpers.

Provides the TimestampMixin used by every record collection for its
created_at/updated_at bookkeeping, and a KSUID generator for the public
identifiers exposed to the dashboard."""

import datetime

from tortoise import fields, models
from ksuid import ksuid


def generate_ksuid():
    """Generate a K-Sortable Unique IDentifier (KSUID).

    KSUIDs are timestamp prefixed, URL-safe and sort chronologically, which
    keeps imported batches ordered by insertion time.

    Returns:
        str: A string representation of the generated KSUID.
    """
    return str(ksuid.Ksuid())


def as_naive_utc(value: datetime.datetime) -> datetime.datetime:
    """Convert to naive UTC, the form every timestamp is stored and filtered in.

    Naive values are taken to be UTC already.
    """
    if value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return value


class TimestampMixin(models.Model):
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    async def save(self, *args, **kwargs) -> None:
        # SQLite compares timestamps as text, so offsets must never reach the table.
        for name, field in self._meta.fields_map.items():
            if isinstance(field, fields.DatetimeField):
                value = getattr(self, name, None)
                if value is not None:
                    setattr(self, name, as_naive_utc(value))
        await super().save(*args, **kwargs)

    class Meta:
        abstract = True
