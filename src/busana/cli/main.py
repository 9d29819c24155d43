import asyncio
import json
import logging
from typing import Optional

import typer

from ..core.config import DATABASE_URL, PAYROLL_EXPENSE_CATEGORY
from ..core.database import DataStore
from ..core.logging_config import configure_logging
from ..features.catalog.models import Product
from ..features.ledgers.models import AdvertisingSettlement, AffiliateEndorsement, CashFlowEntry
from ..features.sales.models import SalesRecord
from ..features.trends import service as trend_service

logger = logging.getLogger(__name__)

app = typer.Typer(name="busana-reports", help="CLI for the Busana reporting database and KPI trends.")

db_app = typer.Typer(name="db", help="Inspect and prepare the reporting database.")
trends_app = typer.Typer(name="trends", help="Compute monthly KPI trends from the command line.")
app.add_typer(db_app)
app.add_typer(trends_app)

DatabaseOption = typer.Option(None, "--database-url", help="Overrides DATABASE_URL.")

COLLECTIONS = {
    "sales_data": SalesRecord,
    "product_data": Product,
    "advertising_settlement": AdvertisingSettlement,
    "affiliate_endorsements": AffiliateEndorsement,
    "cash_flow_entries": CashFlowEntry,
}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level.")):
    configure_logging("DEBUG" if verbose else "WARNING")


@db_app.command("init")
def init_db_command(database_url: Optional[str] = DatabaseOption):
    """Creates any missing reporting tables."""
    asyncio.run(_init_db(database_url or DATABASE_URL))


async def _init_db(database_url: str):
    async with DataStore(database_url, generate_schemas=True):
        typer.secho("Reporting tables are in place.", fg=typer.colors.GREEN)


@db_app.command("check")
def check_db_command(database_url: Optional[str] = DatabaseOption):
    """Connects and prints the record count of every collection."""
    asyncio.run(_check_db(database_url or DATABASE_URL))


async def _check_db(database_url: str):
    async with DataStore(database_url) as store:
        typer.echo("Successfully connected to the database.")
        for table, model in COLLECTIONS.items():
            try:
                count = await model.all().using_db(store.connection).count()
                typer.echo(f"{table}: {count} record(s)")
            except Exception as e:
                typer.secho(f"{table}: unavailable ({e})", fg=typer.colors.YELLOW)


@trends_app.command("monthly")
def monthly_trends_command(
    database_url: Optional[str] = DatabaseOption,
    payroll_category: str = typer.Option(
        PAYROLL_EXPENSE_CATEGORY, help="Cash flow expense category counted as payroll."
    ),
):
    """Prints the full month-over-month KPI comparison as JSON."""
    asyncio.run(_monthly_trends(database_url or DATABASE_URL, payroll_category))


async def _monthly_trends(database_url: str, payroll_category: str):
    async with DataStore(database_url) as store:
        try:
            data = await trend_service.build_monthly_trends(store, payroll_category)
        except Exception as e:
            typer.secho(f"Failed to compute monthly trends: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
    _echo_json(data.model_dump(mode="json", by_alias=True, exclude_none=True))


@trends_app.command("summary")
def monthly_summary_command(database_url: Optional[str] = DatabaseOption):
    """Prints the lightweight revenue/profit change summary as JSON."""
    asyncio.run(_monthly_summary(database_url or DATABASE_URL))


async def _monthly_summary(database_url: str):
    async with DataStore(database_url) as store:
        try:
            data = await trend_service.build_monthly_trend_summary(store)
        except Exception as e:
            typer.secho(f"Failed to compute monthly trend summary: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
    _echo_json(data.model_dump(mode="json", by_alias=True))


def _echo_json(payload: dict):
    typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    app()
